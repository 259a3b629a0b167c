"""Persistence: async engine, tenant-scoped transactions, ORM models, repositories."""
