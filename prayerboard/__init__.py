"""
Prayer board backend.

FastAPI service backing the prayer wall and Q&A pages: prayer requests,
questions, threaded comments, per-session lift-ups and bookmarks, and a
rotating daily inspiration. Storage is either in-memory or SQL, chosen once
when the app is built.
"""
