"""Routing — compiled route table with O(path-depth) matching.

Routes are registered while the site is assembled and compiled into an
immutable lookup structure when the site freezes.
"""

from clickwrap.routing.route import PathSegment, Route, RouteMatch
from clickwrap.routing.router import Router, parse_path

__all__ = ["PathSegment", "Route", "RouteMatch", "Router", "parse_path"]
