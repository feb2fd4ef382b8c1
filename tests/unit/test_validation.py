"""
Unit tests for schemas, input coercion, exceptions and viewer context
"""

import pytest
from datetime import datetime
from api.dependencies import parse_session_token
from api.errors import status_code_for
from core.exceptions import (
    DirectoryException,
    DuplicateRecord,
    NotFound,
    PermissionDenied,
    QueryFailure,
    ValidationFailure,
)
from core.session import ViewerContext
from directory.validation import MAX_INT, parse_input, coerce_id, coerce_page, coerce_timestamp
from models.base import ResourceCategory, ResourceStatus, UserRole
from schemas.resource import ResourceCreate, ResourceFilter


class TestResourceFilter:
    
    def test_blank_values_are_absent(self):
        filters = ResourceFilter(category=" ", zipcode="", query="  ")
        
        assert filters.category is None
        assert filters.zipcode is None
        assert filters.query is None
        assert filters.applied() == []
    
    def test_applied_lists_set_criteria(self):
        filters = ResourceFilter(category="Mental Health", query="clinic")
        
        assert filters.category == ResourceCategory.MENTAL_HEALTH
        assert filters.applied() == ["category", "query"]
    
    def test_statuses_collect_repeated_values(self):
        filters = ResourceFilter(statuses=["AVAILABLE", "LIMITED", "AVAILABLE"])
        
        assert filters.statuses == [ResourceStatus.AVAILABLE, ResourceStatus.LIMITED]
        assert filters.applied() == ["statuses"]
    
    def test_single_status_string_is_a_list(self):
        assert ResourceFilter(statuses="UNAVAILABLE").statuses == [ResourceStatus.UNAVAILABLE]
    
    @pytest.mark.parametrize("value", [[], [""], ["  ", ""]])
    def test_empty_statuses_are_absent(self, value):
        filters = ResourceFilter(statuses=value)
        
        assert filters.statuses is None
        assert filters.applied() == []
    
    def test_unknown_status_rejected(self):
        with pytest.raises(ValidationFailure) as exc_info:
            parse_input(ResourceFilter, {"statuses": ["AVAILABLE", "CLOSED"]})
        
        assert list(exc_info.value.context["field_errors"]) == ["statuses.1"]
    
    def test_all_categories_accepted(self):
        for category in ResourceCategory:
            assert ResourceFilter(category=category.value).category == category
        assert len(ResourceCategory) == 18


class TestParseInput:
    
    def test_passes_instances_through(self):
        filters = ResourceFilter(zipcode="94103")
        
        assert parse_input(ResourceFilter, filters) is filters
    
    def test_none_means_empty(self):
        assert parse_input(ResourceFilter, None).applied() == []
    
    def test_collects_field_errors(self):
        with pytest.raises(ValidationFailure) as exc_info:
            parse_input(ResourceCreate, {"organization": "X", "category": "Food", "zipcode": "abcde"})
        
        error = exc_info.value
        assert list(error.context["field_errors"]) == ["zipcode"]
        assert error.original_exception is not None
    
    def test_rejects_non_mapping(self):
        with pytest.raises(ValidationFailure):
            parse_input(ResourceFilter, ["Food"])


class TestCoercion:
    
    @pytest.mark.parametrize("value,expected", [(3, 3), ("42", 42), (3.0, 3), (MAX_INT, MAX_INT)])
    def test_coerce_id(self, value, expected):
        assert coerce_id(value) == expected
    
    @pytest.mark.parametrize("value", ["abc", None, True, 1.5j, 3.7, float("inf"), float("nan")])
    def test_coerce_id_rejects(self, value):
        with pytest.raises(ValidationFailure):
            coerce_id(value)
    
    @pytest.mark.parametrize("value", [0, -1, "0", MAX_INT + 1, 10**20, str(10**20)])
    def test_coerce_id_rejects_out_of_range(self, value):
        with pytest.raises(ValidationFailure) as exc_info:
            coerce_id(value, "resource_id")
        
        assert exc_info.value.context == {"resource_id": value}
    
    def test_coerce_page_rejects_oversized(self):
        with pytest.raises(ValidationFailure):
            coerce_page(10**20)
    
    def test_coerce_page_minimum(self):
        assert coerce_page("1") == 1
        with pytest.raises(ValidationFailure):
            coerce_page(0)
    
    def test_coerce_timestamp_normalizes_to_naive_utc(self):
        assert coerce_timestamp("2024-01-15T10:00:00Z") == datetime(2024, 1, 15, 10, 0, 0)
        assert coerce_timestamp(datetime(2024, 1, 15)) == datetime(2024, 1, 15)
        with pytest.raises(ValidationFailure):
            coerce_timestamp(None)


class TestExceptions:
    
    def test_str_includes_context_and_cause(self):
        cause = RuntimeError("socket closed")
        error = QueryFailure("select on resources failed", context={"operation": "select"}, original_exception=cause)
        
        text = str(error)
        assert text.startswith("QueryFailure: select on resources failed")
        assert "operation=select" in text
        assert "RuntimeError: socket closed" in text
        assert error.__cause__ is cause
    
    def test_to_dict(self):
        error = NotFound("Resource 9 does not exist", context={"entity": "resource", "id": 9})
        
        data = error.to_dict()
        assert data["error_type"] == "NotFound"
        assert data["context"] == {"entity": "resource", "id": 9}
        assert data["original_error"] is None
    
    def test_duplicate_is_a_query_failure(self):
        assert issubclass(DuplicateRecord, QueryFailure)
        assert issubclass(QueryFailure, DirectoryException)
    
    @pytest.mark.parametrize("error,status_code", [
        (ValidationFailure("bad"), 422),
        (NotFound("missing"), 404),
        (PermissionDenied("nope"), 403),
        (QueryFailure("down"), 503),
        (DuplicateRecord("dup"), 503),
        (DirectoryException("other"), 500),
    ])
    def test_http_status_mapping(self, error, status_code):
        assert status_code_for(error) == status_code


class TestViewerContext:
    
    def test_anonymous(self):
        viewer = ViewerContext.anonymous()
        
        assert viewer.user_id is None
        assert viewer.username == "Anonymous"
        assert not viewer.is_authenticated
        assert not viewer.can_create_resources()
    
    @pytest.mark.parametrize("role", [UserRole.CASE_MANAGER, UserRole.ADMIN])
    def test_signed_in_roles_can_create(self, role):
        assert ViewerContext(user_id="5", username="x", role=role).can_create_resources()
    
    def test_signed_in_without_role_cannot_create(self):
        assert not ViewerContext(user_id="5", username="x").can_create_resources()
    
    @pytest.mark.parametrize("header,expected", [
        ("Bearer session-12", 12),
        ("bearer session-3", 3),
        ("Bearer session-abc", None),
        ("Bearer 12", None),
        ("Basic session-12", None),
        ("Bearer session-0", None),
        ("Bearer session-99999999999999999999", None),
        ("", None),
        (None, None),
    ])
    def test_parse_session_token(self, header, expected):
        assert parse_session_token(header) == expected
