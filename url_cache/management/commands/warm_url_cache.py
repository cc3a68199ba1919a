from django.core.management.base import BaseCommand

from url_cache.services.cache import warm_popular_expired
from url_cache.tasks import shutdown


class Command(BaseCommand):
    help = "Queue re-extraction of popular URL metadata cache entries that have expired"

    def add_arguments(self, parser):
        parser.add_argument(
            "--no-wait",
            action="store_true",
            help="Exit right after queueing instead of waiting for the extractions",
        )

    def handle(self, *args, **options):
        queued = warm_popular_expired()
        self.stdout.write(f"Warming {queued} popular cache entries")

        if not options.get("no_wait"):
            # The worker pool lives in this process; drain it before exiting.
            shutdown(wait=True)
            self.stdout.write(self.style.SUCCESS("Cache warming finished"))
