"""Medical report domain."""
