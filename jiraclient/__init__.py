"""Client library for users, versions, sprints, projects, issue metadata,
service desk organizations and reference lists of a Jira instance."""

__version__ = "0.1.0"