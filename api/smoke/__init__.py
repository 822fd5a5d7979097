"""
HTTP smoke-test harness.

Binds the application to a real TCP listener (`server.SmokeServer`), issues
plain GET requests over the socket (`client.make_request`) and checks the
top-level endpoints (`checks`).
"""
