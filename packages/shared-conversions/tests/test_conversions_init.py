"""Tests for pixelrelay.conversions public API."""



def test_import_schema_classes():
    """Test that schema classes are importable from top level."""
    from pixelrelay.conversions import (
        AttributionContext,
        AttributionMode,
        ConversionEvent,
        NormalizedIdentity,
        RawLead,
    )

    assert hasattr(AttributionMode, "AD_CLICK")
    assert hasattr(RawLead, "from_dict")
    assert hasattr(ConversionEvent, "to_payload")
    assert hasattr(NormalizedIdentity, "to_user_data")
    assert AttributionContext is not None


def test_import_stage_functions():
    """Test that every pipeline stage is importable from top level."""
    from pixelrelay.conversions import (
        build_conversion_event,
        clean_optional_field,
        hash_identity,
        normalize_argentine_phone,
        resolve_attribution,
        resolve_event_time,
        sanitize_attribution_fields,
    )

    assert callable(clean_optional_field)
    assert callable(sanitize_attribution_fields)
    assert callable(normalize_argentine_phone)
    assert callable(hash_identity)
    assert callable(resolve_event_time)
    assert callable(resolve_attribution)
    assert callable(build_conversion_event)


def test_stages_compose():
    """Test the stages chain into an outbound payload."""
    from pixelrelay.conversions import (
        RawLead,
        build_conversion_event,
        hash_identity,
        resolve_attribution,
        resolve_event_time,
        sanitize_attribution_fields,
    )

    lead = RawLead.from_dict({"nombre": "Ana", "phone": "01123456789", "amount": "500", "fbc": "abc"})
    fields = sanitize_attribution_fields(lead)
    identity = hash_identity(lead.phone, lead.nombre, lead.apellido)
    attribution = resolve_attribution(fields, identity.hashed_phone)
    event = build_conversion_event(
        identity,
        attribution,
        resolve_event_time(lead.event_time),
        lead.amount,
        fields["test_event_code"],
    )

    assert identity.canonical_phone == "5491123456789"
    assert event.to_payload()["data"][0]["user_data"]["fbc"] == "abc"


def test_all_exports():
    """Test __all__ contains expected exports."""
    import pixelrelay.conversions as conversions

    expected = {
        "RawLead",
        "NormalizedIdentity",
        "AttributionMode",
        "AttributionContext",
        "ConversionEvent",
        "clean_optional_field",
        "sanitize_attribution_fields",
        "normalize_argentine_phone",
        "sha256_hex",
        "normalize_name",
        "hash_identity",
        "resolve_event_time",
        "resolve_attribution",
        "parse_amount",
        "build_conversion_event",
        "InvalidAmountError",
    }
    assert set(conversions.__all__) == expected
