"""Account dashboard: activity feed, counters and profile greeting."""
