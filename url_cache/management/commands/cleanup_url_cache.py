import time

from django.core.management.base import BaseCommand, CommandError

from url_cache.services.cache import cleanup


class Command(BaseCommand):
    help = "Delete expired URL metadata cache entries and evict the least popular ones above the size cap"

    def add_arguments(self, parser):
        parser.add_argument(
            "--max-size",
            type=int,
            default=None,
            help="Override the configured cache size cap for this run",
        )

    def handle(self, *args, **options):
        max_size = options.get("max_size")
        if max_size is not None and max_size < 0:
            raise CommandError("--max-size must be zero or positive")

        start = time.perf_counter()
        result = cleanup(max_size=max_size)
        elapsed = time.perf_counter() - start

        self.stdout.write(f"  expired removed: {result.expired_removed}")
        self.stdout.write(f"  excess removed:  {result.excess_removed}")
        self.stdout.write(
            self.style.SUCCESS(f"Cache cleanup completed in {elapsed:.2f}s ({result.total_removed} removed)")
        )
