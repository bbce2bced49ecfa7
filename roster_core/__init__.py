"""
roster_core package: participant models, header aliases, spreadsheet IO, dedup,
storage, remote registration, events, notify, badges and check-in.
"""
__all__ = [
    "models",
    "aliases",
    "io",
    "dedup",
    "validation",
    "storage",
    "api",
    "pipeline",
    "participants",
    "roster",
    "events",
    "notify",
    "badges",
    "export_pdf",
    "checkin",
    "config",
    "errors",
]
