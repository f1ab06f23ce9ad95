"""
Tests for quote_model.py: building QuoteRecord from the order-lookup dict.
"""
from datetime import datetime, timezone

import pytest

from torquehub.forms.quote_model import (
    QuoteRecord, QuoteDataError, OrderStatus, MediaType, MediaItem, LineItem, is_remote_url,
)


class TestFromDict:

    def test_camel_case(self, sample_quote_dict):
        q = QuoteRecord.from_dict(sample_quote_dict)
        assert q.id == "ord-0001"
        assert q.public_token == "tok123abc"
        assert q.status is OrderStatus.PENDING_APPROVAL
        assert q.total_amount == 22000
        assert q.created_at == datetime(2026, 2, 15, 10, 0, tzinfo=timezone.utc)
        assert q.quote_expires_at is None
        assert q.vehicle.year == 2019
        assert q.workshop.document == "12345678000199"
        assert [i.line_total for i in q.items] == [10000, 12000]

    def test_snake_case(self):
        q = QuoteRecord.from_dict({
            "id": 7, "public_token": "t", "description": "x", "status": "draft",
            "total_amount": 0, "items": [], "created_at": datetime(2026, 1, 1),
            "quote_expires_at": "2026-02-01T00:00:00",
            "workshop": {"name": "W"}, "customer": {"name": "C"},
            "vehicle": {"plate": "P", "brand": "B", "model": "M"},
        })
        assert q.id == "7"
        assert q.status is OrderStatus.DRAFT
        assert q.quote_expires_at == datetime(2026, 2, 1)
        assert q.vehicle.year is None

    def test_unknown_status_kept_raw(self, sample_quote_dict):
        sample_quote_dict["status"] = "WAITING_PARTS"
        assert QuoteRecord.from_dict(sample_quote_dict).status == "WAITING_PARTS"

    def test_float_total_rejected(self, sample_quote_dict):
        sample_quote_dict["totalAmount"] = 220.0
        with pytest.raises(QuoteDataError):
            QuoteRecord.from_dict(sample_quote_dict)

    def test_float_unit_price_rejected(self, sample_quote_dict):
        sample_quote_dict["items"][0]["unitPrice"] = 50.0
        with pytest.raises(QuoteDataError):
            QuoteRecord.from_dict(sample_quote_dict)

    def test_zero_quantity_rejected(self, sample_quote_dict):
        sample_quote_dict["items"][0]["quantity"] = 0
        with pytest.raises(QuoteDataError):
            QuoteRecord.from_dict(sample_quote_dict)

    def test_missing_workshop_name(self, sample_quote_dict):
        sample_quote_dict["workshop"] = {}
        with pytest.raises(QuoteDataError):
            QuoteRecord.from_dict(sample_quote_dict)

    def test_bad_date(self, sample_quote_dict):
        sample_quote_dict["createdAt"] = "yesterday"
        with pytest.raises(QuoteDataError):
            QuoteRecord.from_dict(sample_quote_dict)

    def test_not_a_dict(self):
        with pytest.raises(QuoteDataError):
            QuoteRecord.from_dict(["nope"])

    def test_blank_observations_become_none(self, sample_quote_dict):
        sample_quote_dict["observations"] = "   "
        assert QuoteRecord.from_dict(sample_quote_dict).observations is None

    def test_unknown_media_type(self, sample_quote_dict):
        sample_quote_dict["media"] = [{"type": "AUDIO", "url": "a.mp3"}]
        with pytest.raises(QuoteDataError):
            QuoteRecord.from_dict(sample_quote_dict)


class TestRecordHelpers:

    def test_photos_only_in_source_order(self, sample_quote_dict):
        sample_quote_dict["media"] = [
            {"type": "PHOTO", "url": "a.png"},
            {"type": "VIDEO", "url": "b.mp4"},
            {"type": "photo", "url": "https://cdn.example.com/c.png", "caption": "C"},
        ]
        q = QuoteRecord.from_dict(sample_quote_dict)
        assert [p.url for p in q.photos] == ["a.png", "https://cdn.example.com/c.png"]
        assert q.photos[1].is_remote
        assert not q.photos[0].is_remote

    def test_items_total(self, sample_quote_dict):
        assert QuoteRecord.from_dict(sample_quote_dict).items_total() == 22000

    def test_line_total(self):
        assert LineItem("x", 3, 1999).line_total == 5997

    def test_record_is_frozen(self, sample_quote_dict):
        q = QuoteRecord.from_dict(sample_quote_dict)
        with pytest.raises(AttributeError):
            q.total_amount = 1

    def test_media_item_flags(self):
        assert MediaItem(MediaType.PHOTO, "HTTPS://x/y.png").is_remote
        assert not MediaItem(MediaType.VIDEO, "x.mp4").is_photo

    @pytest.mark.parametrize("url,remote", [
        ("https://pub.r2.dev/a.png", True),
        ("Http://host/a.png", True),
        ("uploads/a.png", False),
        ("/uploads/http.png", False),
        ("", False),
    ])
    def test_is_remote_url(self, url, remote):
        assert is_remote_url(url) is remote
