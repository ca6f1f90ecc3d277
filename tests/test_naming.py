"""Tests for the naming module."""

from pathlib import Path

from apigen.naming import (
    artifact_path,
    build_file_name,
    normalize_operation_id,
    path_to_directory,
)


class TestNormalizeOperationId:
    """Test operationId normalization."""

    def test_capitalized(self):
        assert normalize_operation_id("listItems") == "ListItems"

    def test_dedup_suffix_removed(self):
        assert normalize_operation_id("getUser_2") == "GetUser"

    def test_multi_digit_suffix(self):
        assert normalize_operation_id("getUser_12") == "GetUser"

    def test_inner_underscore_kept(self):
        assert normalize_operation_id("get_user") == "Get_user"

    def test_already_capitalized(self):
        assert normalize_operation_id("Ping") == "Ping"

    def test_empty(self):
        assert normalize_operation_id("") == ""


class TestPathToDirectory:
    """Test path template -> directory mapping."""

    def test_params_bracketed(self):
        assert path_to_directory("/users/{id}/orders") == "users/[id]/orders"

    def test_multiple_params(self):
        assert path_to_directory("/users/{userId}/orders/{orderId}") == "users/[userId]/orders/[orderId]"

    def test_static_path(self):
        assert path_to_directory("/ping") == "ping"

    def test_root(self):
        assert path_to_directory("/") == ""


class TestArtifactPath:
    """Test artifact file names and locations."""

    def test_file_name(self):
        assert build_file_name("get", "ListItems") == "getListItems.ts"

    def test_method_lowercased(self):
        assert build_file_name("POST", "CreateUser") == "postCreateUser.ts"

    def test_full_path(self):
        path = artifact_path(Path("generated"), "/users/{id}", "get", "GetUser")
        assert path == Path("generated/users/[id]/getGetUser.ts")
