"""Unit tests for input validation and normalization."""
from __future__ import annotations

import dataclasses
import logging

import pytest

from pagelens.errors import ErrorCodes, ValidationError
from pagelens.ingredients import PageDetails, gather_ingredients


class TestGatherIngredients:
    """Tests for building canonical ingredients."""

    def test_keywords_are_normalized(self, valid_html, page_details):
        """Keywords are trimmed and lower-cased; blank related keywords are dropped."""
        ingredients = gather_ingredients(
            valid_html, page_details, "  Coffee Beans ", ["Arabica ", "", "   ", "ROASTING"]
        )
        assert ingredients.focus_keyword == "coffee beans"
        assert ingredients.related_keywords == ("arabica", "roasting")

    def test_all_keywords(self, valid_html, page_details):
        """all_keywords lists the focus keyword first."""
        ingredients = gather_ingredients(valid_html, page_details, "coffee", ["arabica"])
        assert ingredients.all_keywords == ["coffee", "arabica"]

    def test_all_keywords_without_focus(self, valid_html, page_details):
        """An empty focus keyword is not part of all_keywords."""
        ingredients = gather_ingredients(valid_html, page_details, "", ["arabica"])
        assert ingredients.all_keywords == ["arabica"]

    def test_html_passed_through(self, valid_html, page_details):
        """The HTML is kept unchanged."""
        ingredients = gather_ingredients(valid_html, page_details)
        assert ingredients.html_content == valid_html
        assert ingredients.page_details is page_details

    def test_ingredients_are_immutable(self, valid_html, page_details):
        """Ingredients cannot be modified after creation."""
        ingredients = gather_ingredients(valid_html, page_details, "coffee")
        with pytest.raises(dataclasses.FrozenInstanceError):
            ingredients.focus_keyword = "tea"

    def test_empty_focus_keyword_logs_warning(self, valid_html, page_details, caplog):
        """A missing focus keyword is allowed but logged."""
        with caplog.at_level(logging.WARNING, logger="pagelens.ingredients"):
            ingredients = gather_ingredients(valid_html, page_details, "   ")
        assert ingredients.focus_keyword == ""
        assert "No focus keyword" in caplog.text


class TestValidation:
    """Tests for rejected inputs."""

    @pytest.mark.parametrize("html", ["", "   \n  "])
    def test_empty_html_rejected(self, html, page_details):
        """Empty HTML is rejected."""
        with pytest.raises(ValidationError, match="HTML content is required"):
            gather_ingredients(html, page_details)

    def test_short_html_rejected(self, short_html, page_details):
        """HTML below the minimum length is rejected."""
        with pytest.raises(ValidationError, match="too short") as exc_info:
            gather_ingredients(short_html, page_details)
        assert exc_info.value.code == ErrorCodes.VALIDATION_ERROR
        assert exc_info.value.details["minimum"] == 100

    def test_html_at_minimum_length_accepted(self, page_details):
        """HTML of exactly the minimum length is accepted."""
        html = "<p>" + "x" * 93 + "</p>"
        assert len(html) == 100
        assert gather_ingredients(html, page_details).html_content == html

    def test_missing_url_rejected(self, valid_html):
        """A page without a URL is rejected."""
        with pytest.raises(ValidationError, match="Page URL is required"):
            gather_ingredients(valid_html, PageDetails(url="", title="Title"))

    def test_missing_title_rejected(self, valid_html, mock_url):
        """A page without a title is rejected."""
        with pytest.raises(ValidationError, match="Page title is required"):
            gather_ingredients(valid_html, PageDetails(url=mock_url, title="  "))


class TestPageDetails:
    """Tests for page metadata serialization."""

    def test_to_dict_is_camel_case(self, mock_url):
        """Serialized details use camelCase and include extra fields."""
        details = PageDetails(
            url=mock_url,
            title="Coffee",
            published_date="2024-03-01",
            extra={"category": "guides"},
        )
        data = details.to_dict()
        assert data["publishedDate"] == "2024-03-01"
        assert data["category"] == "guides"
