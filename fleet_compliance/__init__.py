"""Fleet compliance engine: driver document evaluation, alerting, and snapshots."""
