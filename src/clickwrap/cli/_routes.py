"""``clickwrap routes`` — list registered routes.

Prints METHOD, PATH and handler name for every route the site serves
with the current environment.
"""

import argparse

from clickwrap.cli._load import load_config, load_site


def _handler_name(handler: object) -> str:
    name = getattr(handler, "__qualname__", None) or type(handler).__name__
    return str(name)


def run_routes(args: argparse.Namespace) -> None:
    site = load_site(load_config())
    routes = site.router.routes
    if not routes:
        print("No routes registered.")
        return

    rows: list[tuple[str, str, str]] = []
    for route in routes:
        methods_str = ", ".join(sorted(route.methods))
        handler_name = _handler_name(route.handler)
        if route.name:
            handler_name = f"{handler_name} ({route.name})"
        rows.append((methods_str, route.path, handler_name))

    max_methods = max(max(len(r[0]) for r in rows), 6)  # "METHOD" header
    max_path = max(max(len(r[1]) for r in rows), 4)  # "PATH" header

    fmt = f"{{:<{max_methods}}}  {{:<{max_path}}}  {{}}"
    print(fmt.format("METHOD", "PATH", "HANDLER"))
    sep_len = max_methods + max_path + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for methods_str, path, handler_name in rows:
        print(fmt.format(methods_str, path, handler_name))
