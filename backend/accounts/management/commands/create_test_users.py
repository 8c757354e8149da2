from django.core.management.base import BaseCommand
from accounts.models import CustomUser


class Command(BaseCommand):
    help = 'Create demo users for each console and customer role'

    def handle(self, *args, **options):
        users_data = [
            {'username': 'super_admin', 'password': 'super_admin_password', 'role': 'super_admin',
             'name': 'Super Admin', 'mobile_number': '9000000001', 'kyc_status': 'verified'},
            {'username': 'admin_user', 'password': 'admin_password', 'role': 'admin',
             'name': 'Console Admin', 'mobile_number': '9000000002', 'kyc_status': 'verified'},
            {'username': 'farmer_user', 'password': 'farmer_password', 'role': 'farmer',
             'name': 'Ramesh Kumar', 'mobile_number': '9000000003', 'kyc_status': 'verified',
             'state': 'Punjab'},
            {'username': 'trader_user', 'password': 'trader_password', 'role': 'trader',
             'name': 'Sharma Traders', 'mobile_number': '9000000004', 'kyc_status': 'verified',
             'state': 'Haryana'},
            {'username': 'miller_user', 'password': 'miller_password', 'role': 'miller',
             'name': 'Annapurna Mills', 'mobile_number': '9000000005', 'kyc_status': 'pending',
             'state': 'Madhya Pradesh'},
        ]

        for user_data in users_data:
            if CustomUser.objects.filter(username=user_data['username']).exists():
                self.stdout.write(
                    self.style.WARNING(f"User {user_data['username']} already exists")
                )
                continue

            password = user_data.pop('password')
            user = CustomUser(**user_data)
            user.set_password(password)
            user.save()

            self.stdout.write(
                self.style.SUCCESS(f"Successfully created {user.role} user: {user.username}")
            )

        self.stdout.write(
            self.style.SUCCESS("All test users created successfully!")
        )
