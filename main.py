import datetime
import logging
import os

from rich.console import Console
from rich.logging import RichHandler
from rich.pretty import pprint

from argschema import *

__prog__ = "todo"

add = Command("add", "add a task to the list", {
    "title": Argument(String(min=1), positional=0, descr="what needs doing"),
    "priority": Argument(Choice("low", "normal", "high"), short="p", descr="how urgent it is"),
    "tags": Argument(Sequence(str), short="t", descr="labels, repeat the flag for several"),
    "due": Argument(Optional(Converter(datetime.date.fromisoformat, "date")), descr="ISO date"),
})

remove = command(
    "remove",
    "remove tasks by id",
    ids=Argument(Sequence(Integer(min=1), min=1), positional=..., descr="task ids"),
    force=Argument(bool, short="f", descr="do not ask for confirmation"),
)

todo = Subcommands({"add": add, "remove": remove}, name=__prog__, descr="a tiny task list")


if __name__ == '__main__':
    logging.basicConfig(
        level=os.environ.get("ARGSCHEMA_LOG_LEVEL", "WARNING").upper(),
        format="%(message)s",
        handlers=[RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
            log_time_format="[%H:%M:%S]",
        )],
    )
    pprint(run(todo))
