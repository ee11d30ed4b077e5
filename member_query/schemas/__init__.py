"""Pydantic schemas package.

Folder intent:
  common.py   — CamelModel base + HealthResponse (all schemas inherit CamelModel)
  member.py   — search criteria, member/team projection, member/team DTOs
"""
