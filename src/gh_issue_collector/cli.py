"""Console entrypoint shim.

The implementation lives in `gh_issue_collector.collector.main`; this module
only makes `python -m gh_issue_collector.cli` work.
"""

from __future__ import annotations

from gh_issue_collector.collector.main import main

__all__ = ["main"]


if __name__ == "__main__":
    raise SystemExit(main())
