from django.core.exceptions import ValidationError as DjangoValidationError
from django.test import SimpleTestCase
from rest_framework import status
from rest_framework.exceptions import NotFound, ValidationError

from core.exceptions import api_exception_handler, error_response


class ExceptionHandlerTests(SimpleTestCase):
    def test_error_response_shape(self):
        res = error_response("Bad thing", status.HTTP_409_CONFLICT, errors=["x"])
        self.assertEqual(res.status_code, 409)
        self.assertEqual(res.data, {"detail": "Bad thing", "errors": ["x"]})

    def test_django_validation_error_becomes_400(self):
        res = api_exception_handler(DjangoValidationError("Quantity must be positive"), {})
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data, {"detail": "Quantity must be positive"})

    def test_django_field_errors_keep_their_keys(self):
        exc = DjangoValidationError({"quantity_mt": ["Must be positive"]})
        res = api_exception_handler(exc, {})
        self.assertEqual(res.data, {"detail": {"quantity_mt": ["Must be positive"]}})

    def test_list_errors_are_wrapped(self):
        res = api_exception_handler(ValidationError(["Only one"]), {})
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["detail"], "Only one")

    def test_drf_errors_pass_through(self):
        res = api_exception_handler(NotFound("Gone"), {})
        self.assertEqual(res.status_code, 404)
        self.assertEqual(res.data, {"detail": "Gone"})

    def test_unknown_errors_are_500(self):
        with self.assertLogs("core.exceptions", level="ERROR"):
            res = api_exception_handler(RuntimeError("boom"), {})
        self.assertEqual(res.status_code, 500)
        self.assertEqual(res.data, {"detail": "Internal server error"})
