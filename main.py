from rich.pretty import pprint

from argot import *

cli = Interface(
    "demo",
    "1.0",
    "Build and clean a project from the command line.",
    Configuration.PRINT_HELP_FOR_NO_SELECTION | Configuration.FAIL_ON_MISSING_OPTION,
    colorful=True,
)

output = cli.argument("--output", "-o", type=Folder(), default="dist", descr="where the build goes")
jobs = cli.argument("--jobs", "-j", type=int, default=1, descr="parallel jobs")
tags = cli.argument("--tags", "-t", type=str, multiple=True, descr="labels attached to the build")
verbose = cli.argument("--verbose", "-v", descr="print every step")

build = cli.command("build", requires=[output], descr="build the project")
clean = cli.command("clean", descr="remove build artifacts")


@jobs.validator
def positive():
    return jobs.value > 0 or "jobs must be a positive number"


if __name__ == '__main__':
    cli.parse_or_exit()
    pprint(cli.selected)
    pprint(cli.selected_arguments)
