"""
Integration Tests

Exercise the HTTP surface end to end with FastAPI's TestClient.
"""
