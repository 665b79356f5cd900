"""Tests for reserved route segments."""

import pytest

from user_resolution.routes import RESERVED_ROUTES, is_reserved_route


class TestReservedRoutes:
    def test_list_contents(self):
        assert len(RESERVED_ROUTES) == 22
        assert len(set(RESERVED_ROUTES)) == 22
        for route in ("admin", "api", ".well-known", "__data", "socket.io", "blog", "terms"):
            assert route in RESERVED_ROUTES

    @pytest.mark.parametrize("segment", ["admin", "api", "blog", "settings", ".well-known", "_app"])
    def test_reserved(self, segment):
        assert is_reserved_route(segment) is True

    @pytest.mark.parametrize("segment", ["ADMIN", "Api", "BLOG", "Socket.IO"])
    def test_case_insensitive(self, segment):
        assert is_reserved_route(segment) is True

    @pytest.mark.parametrize("segment", ["alice", "admin2", "my-blog", "apis", "", "well-known"])
    def test_not_reserved(self, segment):
        assert is_reserved_route(segment) is False
