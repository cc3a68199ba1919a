import json

from django.core.management.base import BaseCommand
from django.core.serializers.json import DjangoJSONEncoder

from url_cache.services.cache import statistics


class Command(BaseCommand):
    help = "Print URL metadata cache statistics"

    def add_arguments(self, parser):
        parser.add_argument("--json", action="store_true", help="Print the raw report as JSON")

    def handle(self, *args, **options):
        report = statistics()

        if options.get("json"):
            self.stdout.write(json.dumps(report, cls=DjangoJSONEncoder, indent=2))
            return

        self.stdout.write("URL cache statistics:")
        self.stdout.write(f"  total:    {report['total_cached']}")
        self.stdout.write(f"  valid:    {report['valid_cached']}")
        self.stdout.write(f"  expired:  {report['expired']}")
        self.stdout.write(f"  popular:  {report['popular_items']}")
        self.stdout.write(f"  hits:     {report['total_hits']} (avg {report['avg_hits_per_url']:.2f})")
        self.stdout.write(f"  size:     {report['cache_size_mb']:.2f} MB")
        self.stdout.write(f"  oldest:   {report['oldest_entry'] or '-'}")
        self.stdout.write(f"  newest:   {report['newest_entry'] or '-'}")

        if report["platforms"]:
            self.stdout.write("")
            self.stdout.write("Platforms:")
            for platform, count in report["platforms"].items():
                self.stdout.write(f"  {platform or '-'}: {count}")

        if report["most_popular_urls"]:
            self.stdout.write("")
            self.stdout.write("Most popular:")
            for normalized_url, hits in report["most_popular_urls"]:
                self.stdout.write(f"  {hits:>6}  {normalized_url}")
