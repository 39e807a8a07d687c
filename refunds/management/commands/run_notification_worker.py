import logging

import redis
from django.conf import settings
from django.core.management.base import BaseCommand
from rq import Queue, Worker


class Command(BaseCommand):
    help = "Run the RQ worker that delivers refund notifications."

    def add_arguments(self, parser):
        parser.add_argument("--name", default=None, help="Worker name (default: generated by RQ)")
        parser.add_argument("--burst", action="store_true", help="Exit once the queue is empty")

    def handle(self, *args, **opts):
        conf = settings.NOTIFICATIONS
        conn = redis.from_url(conf["REDIS_URL"])
        queue = Queue(conf["QUEUE"], connection=conn)
        self.stdout.write(f"Listening on queue {conf['QUEUE']}")
        worker = Worker([queue], connection=conn, name=opts["name"])
        worker.work(burst=opts["burst"], logging_level=logging.INFO)
