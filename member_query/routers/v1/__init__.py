"""v1 router package — all /api/v1/* endpoints live here.

Files:
  members.py  — member search (list, paged, fetch-joined), member/team registration

Rule: Routers only handle HTTP (request parsing, response shaping).
      All business logic delegates to member_query/services/.
"""
