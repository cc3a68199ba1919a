import time

from django.core.management.base import BaseCommand
from django.db import connection
from django.db.utils import OperationalError


class Command(BaseCommand):
    help = "Wait for the cache database to become available before running migrations or jobs"

    def add_arguments(self, parser):
        parser.add_argument("--timeout", type=int, default=60, help="Maximum time to wait in seconds (default: 60)")
        parser.add_argument("--interval", type=float, default=1.0, help="Check interval in seconds (default: 1.0)")

    def handle(self, *args, **options):
        timeout = options["timeout"]
        interval = options["interval"]
        vendor = connection.vendor

        self.stdout.write(f"Waiting for {vendor} database...")

        deadline = time.monotonic() + timeout
        while True:
            try:
                connection.ensure_connection()
            except OperationalError as exc:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    self.stdout.write(self.style.ERROR(f"Database connection timeout after {timeout}s"))
                    raise SystemExit(1)
                self.stdout.write(f"Database unavailable ({remaining:.0f}s left): {exc}")
                time.sleep(interval)
            else:
                self.stdout.write(self.style.SUCCESS("Database is available!"))
                return
