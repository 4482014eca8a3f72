"""Side-effecting tools reachable from the router."""
