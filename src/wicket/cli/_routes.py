"""``wicket routes`` — list declared routes.

Compiles the route table exactly as ``wicket run`` would, so duplicate
or malformed declarations are reported here too.
"""

import argparse
import sys

from wicket.cli._app import build_app
from wicket.errors import ConfigurationError


def run_routes(args: argparse.Namespace) -> None:
    """Print a table of METHOD, PATH, GUARDS, and DESCRIPTION."""
    try:
        registry = build_app().registry
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if not len(registry):
        print("No routes declared.")
        return

    rows = [
        (str(route.method), route.path, str(len(route.guards)), route.description)
        for route in registry
    ]
    max_method = max(6, *(len(r[0]) for r in rows))
    max_path = max(4, *(len(r[1]) for r in rows))

    fmt = f"{{:<{max_method}}}  {{:<{max_path}}}  {{:<6}}  {{}}"
    print(fmt.format("METHOD", "PATH", "GUARDS", "DESCRIPTION"))
    print("-" * min(max_method + max_path + 10 + max(len(r[3]) for r in rows), 80))
    for row in rows:
        print(fmt.format(*row))
