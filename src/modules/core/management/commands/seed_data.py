from __future__ import annotations

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction

from modules.customers.models import Customer

SEED_USERS = [
    # username, password, is_superuser
    ("admin", "admin123", True),
    ("operator", "operator123", False),
]

SEED_CUSTOMERS = [
    ("Ana Souza", "Av. Paulista, 1000 - São Paulo/SP", "11987654321", "ana@example.com"),
    ("Bruno Lima", "Rua XV de Novembro, 50 - Curitiba/PR", "41998765432", "bruno@example.com"),
    ("Carla Mendes", "Av. Afonso Pena, 300 - Belo Horizonte/MG", "31991234567", "carla@example.com"),
    ("Daniel Costa", "Rua da Aurora, 120 - Recife/PE", "81992345678", "daniel@example.com"),
    ("Eduardo Alves", "Av. Borges de Medeiros, 800 - Porto Alegre/RS", "51993456789", "eduardo@example.com"),
]


class Command(BaseCommand):
    help = "Seed database with login users and sample customers."

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write("Seeding development data...")

        users_created = self._seed_users()
        customers_created = self._seed_customers()

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"users={users_created}, "
                f"customers={customers_created}"
            )
        )

    def _seed_users(self) -> int:
        User = get_user_model()
        created = 0
        for username, password, is_superuser in SEED_USERS:
            if User.objects.filter(username=username).exists():
                continue
            if is_superuser:
                User.objects.create_superuser(username, password=password)
            else:
                User.objects.create_user(username, password=password)
            created += 1
        return created

    def _seed_customers(self) -> int:
        self.stdout.write("Creating customers...")
        created = 0
        for name, address, phone, email in SEED_CUSTOMERS:
            _, was_created = Customer.objects.get_or_create(
                email=email,
                defaults={"name": name, "address": address, "phone": phone},
            )
            created += int(was_created)
        return created
