"""Entrypoint: python -m chat_timeline <messages.json>"""
from __future__ import annotations

from chat_timeline.scripts.preview_timeline import main

if __name__ == "__main__":
    raise SystemExit(main())
