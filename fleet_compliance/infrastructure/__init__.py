"""Infrastructure: SQLAlchemy persistence, repositories and sweep services."""
