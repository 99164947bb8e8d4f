"""Services Layer — IO orchestration around the pure core.

Invariants:
    - Services take their collaborators (AsyncSession, KeyValueStore, BackgroundTasks)
      as arguments; none reach for globals except the audit writer, which runs
      after the request session is closed
"""
