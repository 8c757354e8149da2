from __future__ import annotations

import logging

from django.utils import timezone

from ..models import APPROVAL_APPROVED, APPROVAL_DECLINED, APPROVAL_PENDING

logger = logging.getLogger(__name__)

DECISIONS = (APPROVAL_APPROVED, APPROVAL_DECLINED)


class ApprovalError(Exception):
    """Raised when an approval decision is not allowed"""
    pass


def decide(order, status: str, reason: str, user):
    """
    Record a super admin's decision on a pending confirmed sales order.

    Raises:
        ApprovalError: unknown status, already decided, or a decline without a reason
    """
    if status not in DECISIONS:
        raise ApprovalError('status must be approved or declined')
    if order.approval_status != APPROVAL_PENDING:
        raise ApprovalError('Approval already decided. Ask Admin to re-submit before reviewing again.')
    reason = (reason or '').strip()
    if status == APPROVAL_DECLINED and not reason:
        raise ApprovalError('Decline reason is required')

    order.approval_status = status
    if status == APPROVAL_APPROVED:
        order.approved_by = user
        order.approved_at = timezone.now()
        order.declined_reason = ''
    else:
        order.approved_by = None
        order.approved_at = None
        order.declined_reason = reason
    order.save(update_fields=['approval_status', 'approved_by', 'approved_at', 'declined_reason', 'updated_at'])
    logger.info("Confirmed sales order %s %s by %s", order.pk, status, user.pk)
    return order


def reset_to_pending(order) -> None:
    """An edit by anyone but a super admin sends the order back for review."""
    order.approval_status = APPROVAL_PENDING
    order.approved_by = None
    order.approved_at = None
    order.declined_reason = ''
