from __future__ import annotations

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction

from modules.carts.models import Cart, CartItem
from modules.catalog.models import Service


class Command(BaseCommand):
    help = "Seed database with development data for the pickup flow."

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write("Seeding development data...")

        users_created = self._seed_users()
        services = self._seed_services()
        lines = self._seed_cart(services)

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"users={users_created}, "
                f"services={len(services)}, "
                f"cart_lines={lines}"
            )
        )

    def _seed_users(self) -> int:
        User = get_user_model()
        created = 0
        if not User.objects.filter(username="admin").exists():
            User.objects.create_superuser(
                "admin", email="admin@example.com", password="admin123"
            )
            created += 1
        if not User.objects.filter(username="customer").exists():
            User.objects.create_user(
                "customer", email="customer@example.com", password="customer123"
            )
            created += 1
        return created

    def _seed_services(self) -> dict[str, Service]:
        self.stdout.write("Creating services...")
        catalog = [
            ("Wash & Fold", "Machine wash, tumble dry and fold."),
            ("Wash & Iron", "Machine wash and steam iron."),
            ("Dry Cleaning", "Solvent cleaning for delicate fabrics."),
            ("Shoe Cleaning", "Deep clean for sneakers and leather shoes."),
        ]
        services: dict[str, Service] = {}
        for name, description in catalog:
            service, _ = Service.objects.get_or_create(
                name=name, defaults={"description": description}
            )
            services[name] = service
        self.stdout.write(self.style.SUCCESS("Creating services... Done!"))
        return services

    def _seed_cart(self, services: dict[str, Service]) -> int:
        self.stdout.write("Filling the customer's cart...")
        user = get_user_model().objects.get(username="customer")
        cart, _ = Cart.objects.get_or_create(user=user)
        cart.items.all().delete()
        lines = [
            ("Wash & Fold", "Shirt", 4, Decimal("30.00")),
            ("Wash & Iron", "Trousers", 2, Decimal("45.00")),
            ("Dry Cleaning", "Blazer", 1, Decimal("250.00")),
        ]
        for position, (service_name, item, quantity, price) in enumerate(lines):
            CartItem.objects.create(
                cart=cart,
                service=services[service_name],
                item=item,
                quantity=quantity,
                price=price,
                position=position,
            )
        self.stdout.write(self.style.SUCCESS("Filling the customer's cart... Done!"))
        return len(lines)
