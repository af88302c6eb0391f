"""
Restaurant Booking Service

Reservation scheduling and table-availability coordination:
- Reservation lifecycle (PENDING -> CONFIRMED -> CANCELLED)
- Calendar legality, blackout windows and table conflict detection
- Short-lived table holds during interactive selection
"""
