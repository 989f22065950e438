import sys

from rich.pretty import pprint

from argbind import *
from argbind.faults import console

USAGE = "usage: %s [-n COUNT] [-r RATIO] [-m MODE] [-t TAG,...] FILE..."


class Options(Arguments):
    def __init__(self):
        super().__init__()
        self.count = 1
        self.ratio = 0.5
        self.mode = "fast"
        self.tags = set()
        self.files = []
        self.named("-n", "repeat count", Assign(self, "count"), int, minimum=1, maximum=100)
        self.named("-r", "sampling ratio", Assign(self, "ratio"), float, minimum=0.0, maximum=1.0)
        self.named("-m", "mode", Assign(self, "mode"), choices=("fast", "safe", "exact"))
        self.named("-t", "tags", Insert(self.tags), separator=",")
        self.positional("input file", Append(self.files), required=True)


if __name__ == '__main__':
    options = Options()
    try:
        options.parse()
    except ArgumentError as error:
        # Help wins over a missing required argument.
        if options.show_usage:
            print(USAGE % options.app_name)
            sys.exit(0)
        console.print(error)
        sys.exit(1)
    if options.show_usage:
        print(USAGE % options.app_name)
        sys.exit(0)
    pprint({"count": options.count, "ratio": options.ratio, "mode": options.mode, "tags": options.tags, "files": options.files})
