"""Routing — exact-match static routes served first-match-wins.

Routes are built (and their files checked) during setup, collected into
a ``RouteTable``, and frozen before the first request.
"""

from wren.routing.route import Route, RouteBuilder, RouteMatch
from wren.routing.table import RouteTable, dispatch

__all__ = ["Route", "RouteBuilder", "RouteMatch", "RouteTable", "dispatch"]
