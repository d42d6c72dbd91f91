# =============================================================================
# tests/test_models.py - Pydantic Model Tests
# =============================================================================
# Unit tests for the portfolio models to ensure:
# - Stored documents of any vintage map onto canonical records
# - Wire format uses camelCase keys and exposes both `_id` and `id`
# - Contact form rules fail with their own messages
#
# Run with: pytest tests/test_models.py -v
# =============================================================================

from datetime import datetime, timezone

import pytest
from bson import ObjectId
from pydantic import ValidationError

from core.models import (
    AppStoreApp,
    ClosedTest,
    ContactFormData,
    EmailResult,
    Experience,
    PortfolioStats,
)


# =============================================================================
# Experience Tests
# =============================================================================

class TestExperience:
    """Tests for Experience.from_document and serialization."""

    def test_from_document_maps_camel_case_fields(self, sample_companies):
        """Test a well-formed record maps field for field."""
        exp = Experience.from_document(sample_companies[0])

        assert exp.id == "acme"
        assert exp.company_name == "Acme Corp"
        assert exp.work_start == "2019-01-15"
        assert exp.work_end == "2020-06-30"
        assert exp.technologies == ["Kotlin", "Firebase"]
        assert len(exp.play_store_apps) == 1
        assert exp.is_current is False

    def test_missing_or_null_end_is_current(self):
        """Test every 'no end date' representation means current."""
        for work_end in (None, "", "null", "NULL"):
            exp = Experience.from_document({"_id": "x", "workStart": "2021-01-01", "workEnd": work_end})
            assert exp.is_current, work_end

        exp = Experience.from_document({"_id": "x", "workStart": "2021-01-01"})
        assert exp.is_current

    def test_native_dates_rendered_as_iso(self):
        """Test datetime and Extended JSON dates become ISO strings."""
        doc = {
            "_id": ObjectId("65a1f0c2e4b0a1b2c3d4e5f6"),
            "workStart": datetime(2020, 1, 15, tzinfo=timezone.utc),
            "workEnd": {"$date": "2023-07-10T00:00:00Z"},
        }

        exp = Experience.from_document(doc)

        assert exp.id == "65a1f0c2e4b0a1b2c3d4e5f6"
        assert exp.work_start == "2020-01-15T00:00:00.000Z"
        assert exp.work_end == "2023-07-10T00:00:00.000Z"

    def test_odd_field_types_are_coerced(self):
        """Test scalars and missing lists don't break mapping."""
        exp = Experience.from_document({"_id": 42, "technologies": "Kotlin", "position": None})

        assert exp.id == "42"
        assert exp.technologies == ["Kotlin"]
        assert exp.position == ""
        assert exp.web_apps == []

    def test_to_response_has_both_ids_and_extras(self):
        """Test the wire format keeps `_id`, adds `id` and passes extras through."""
        doc = {"_id": "acme", "companyName": "Acme", "order": 3, "id": "stale"}

        data = Experience.from_document(doc).to_response()

        assert data["_id"] == "acme"
        assert data["id"] == "acme"
        assert data["companyName"] == "Acme"
        assert data["order"] == 3
        assert "company_name" not in data


# =============================================================================
# ClosedTest Tests
# =============================================================================

class TestClosedTest:
    """Tests for ClosedTest.from_document."""

    @pytest.mark.parametrize(
        "stored,expected",
        [
            (True, True),
            ("true", True),
            ("", True),
            (None, True),
            (False, False),
            ("false", False),
        ],
    )
    def test_is_active_normalization(self, stored, expected):
        """Test only False and "false" mean inactive."""
        test = ClosedTest.from_document({"_id": "t", "isActive": stored})
        assert test.is_active is expected

    def test_missing_is_active_means_active(self):
        assert ClosedTest.from_document({"_id": "t"}).is_active is True

    def test_timestamps_normalized(self, sample_closed_tests):
        """Test wrapped and plain dates end up as ISO strings."""
        test = ClosedTest.from_document(sample_closed_tests[0])

        assert test.created_at == "2024-01-15T10:30:00.000Z"
        assert test.updated_at == "2024-02-01T08:00:00.000Z"

    def test_missing_timestamps_fall_back_to_now(self):
        """Test absent timestamps still produce a parseable ISO value."""
        test = ClosedTest.from_document({"_id": "t"})

        parsed = datetime.fromisoformat(test.created_at.replace("Z", "+00:00"))
        assert abs((datetime.now(timezone.utc) - parsed).total_seconds()) < 60

    def test_to_response_wire_keys(self, sample_closed_tests):
        data = ClosedTest.from_document(sample_closed_tests[0]).to_response()

        assert data["_id"] == data["id"] == "65a1f0c2e4b0a1b2c3d4e5f6"
        assert data["packageName"] == "codes.sumit.budget"
        assert data["googleGroup"].startswith("https://groups.google.com")
        assert data["isActive"] is True


# =============================================================================
# AppStoreApp Tests
# =============================================================================

class TestAppStoreApp:
    """Tests for AppStoreApp.from_lookup."""

    def test_full_lookup_result(self):
        """Test every upstream field maps to its output key."""
        result = {
            "trackId": 389801252,
            "trackName": "Instagram",
            "description": "Photos and videos",
            "artworkUrl100": "https://is1.example/icon.png",
            "screenshotUrls": ["https://is1.example/1.png", "https://is1.example/2.png"],
            "trackViewUrl": "https://apps.apple.com/us/app/id389801252",
            "version": "300.0",
            "averageUserRating": 4.7,
            "userRatingCount": 25000000,
            "price": 0.0,
            "currency": "USD",
            "artistName": "Instagram, Inc.",
            "primaryGenreName": "Photo & Video",
            "releaseDate": "2010-10-06T07:00:00Z",
            "fileSizeBytes": "402522112",
        }

        data = AppStoreApp.from_lookup(result).to_response()

        assert data["id"] == "389801252"
        assert data["name"] == "Instagram"
        assert data["appStoreUrl"].endswith("id389801252")
        assert data["ratingCount"] == 25000000
        assert data["developer"] == "Instagram, Inc."
        assert data["category"] == "Photo & Video"
        assert data["releaseDate"] == "2010-10-06T07:00:00Z"
        assert data["size"] == 402522112
        assert len(data["screenshots"]) == 2

    def test_sparse_result(self):
        """Test upstream omissions become nulls, not errors."""
        app = AppStoreApp.from_lookup({"trackName": "New App"}, fallback_id="123")

        assert app.id == "123"
        assert app.rating is None
        assert app.size is None
        assert app.screenshots == []


# =============================================================================
# Contact Form Tests
# =============================================================================

class TestContactFormData:
    """Tests for ContactFormData validation rules."""

    def test_valid_submission(self):
        form = ContactFormData(name="Jo", email="jo@example.com", message="0123456789")
        assert form.name == "Jo"

    @pytest.mark.parametrize(
        "payload,message",
        [
            ({"name": "J", "email": "jo@example.com", "message": "Hello there!"},
             "Name must be at least 2 characters"),
            ({"name": "Jo", "email": "not-an-email", "message": "Hello there!"},
             "Please enter a valid email address"),
            ({"name": "Jo", "email": "jo@example.com", "message": "123456789"},
             "Message must be at least 10 characters"),
            ({"email": "jo@example.com", "message": "Hello there!"},
             "Name must be at least 2 characters"),
            ({"name": "Jo\r\nBcc: x@example.com", "email": "jo@example.com", "message": "Hello there!"},
             "Name must not contain line breaks or control characters"),
        ],
    )
    def test_rule_messages(self, payload, message):
        """Test each rule fails with its own sentence."""
        with pytest.raises(ValidationError) as exc_info:
            ContactFormData.model_validate(payload)

        assert exc_info.value.errors()[0]["msg"] == message

    def test_email_result_hides_failure_kind(self):
        """Test the failure discriminator never reaches the response body."""
        result = EmailResult(success=False, message="nope", failure="delivery")

        assert result.model_dump() == {"success": False, "message": "nope"}


class TestPortfolioStats:
    def test_camel_case_dump(self):
        stats = PortfolioStats(
            total_experience="3.4",
            total_companies=2,
            total_projects=5,
            total_technologies=7,
            current_position=True,
            last_updated="2024-07-20T00:00:00.000Z",
        )

        data = stats.model_dump(by_alias=True)

        assert data["totalExperience"] == "3.4"
        assert data["currentPosition"] is True
        assert data["lastUpdated"] == "2024-07-20T00:00:00.000Z"
