"""
Domain services behind the API routes.

- scoring: pure scoring of candidate answers and result aggregation
- access_gate: secret check guarding the candidate view of an assessment
"""
