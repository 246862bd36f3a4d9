"""API tests package.

End-to-end tests for the HTTP surface using TestClient.
Tests the complete request/response cycle including:
- Request gate redirects and context headers
- Handler-level permission guards
- Login/logout session cookies
- RFC 9457 error responses

Note:
    Applications are built with create_app() and in-memory collaborators;
    session tokens are issued with the container's token service.
"""
