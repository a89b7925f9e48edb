"""GitHub Issue Collector.

A small HTTP relay that turns web form submissions into GitHub issues:
- projects, tokens and allowed origins come from a YAML file
- requests are checked against the project's origin allow-list
- issues are created with the project's default labels/assignee/milestone
"""

__version__ = "0.1.0"

from gh_issue_collector.collector.config import CollectorConfig, Project, load_config

__all__ = ["__version__", "CollectorConfig", "Project", "load_config"]
