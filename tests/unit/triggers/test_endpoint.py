"""Unit tests for deployment manifest assembly."""

import logging

import pytest
from pydantic import ValidationError

from dbtrigger.exceptions import ConfigurationError
from dbtrigger.patterns import PathPattern
from dbtrigger.triggers import (
    WRITTEN_EVENT_TYPE,
    EventTrigger,
    ManifestEndpoint,
    NormalizedOptions,
    make_endpoint,
)


class TestMakeEndpoint:
    """Tests for make_endpoint()."""

    def test_literal_instance_goes_to_event_filters(self):
        """A plain instance name is an exact-match filter."""
        endpoint = make_endpoint(
            WRITTEN_EVENT_TYPE,
            {"region": "us-central1", "labels": {"1": "2"}},
            PathPattern("foo/bar"),
            PathPattern("my-instance"),
        )

        assert endpoint.to_dict() == {
            "platform": "gcfv2",
            "labels": {"1": "2"},
            "region": ["us-central1"],
            "eventTrigger": {
                "eventType": WRITTEN_EVENT_TYPE,
                "eventFilters": {"instance": "my-instance"},
                "eventFilterPathPatterns": {"ref": "foo/bar"},
                "retry": False,
            },
        }

    def test_routing_instance_goes_to_path_patterns(self):
        """A wildcard or capture instance is a path-pattern filter."""
        endpoint = make_endpoint(
            WRITTEN_EVENT_TYPE,
            {},
            PathPattern("foo/{path=**}/{bar}"),
            PathPattern("{inst}"),
        )

        assert endpoint.to_dict() == {
            "platform": "gcfv2",
            "labels": {},
            "eventTrigger": {
                "eventType": WRITTEN_EVENT_TYPE,
                "eventFilters": {},
                "eventFilterPathPatterns": {"ref": "foo/{path=**}/{bar}", "instance": "{inst}"},
                "retry": False,
            },
        }

    def test_default_instance_is_wildcard_pattern(self, any_instance):
        endpoint = make_endpoint(WRITTEN_EVENT_TYPE, {}, PathPattern("a"), any_instance)

        assert endpoint.event_trigger.event_filter_path_patterns == {"ref": "a", "instance": "*"}
        assert endpoint.event_trigger.event_filters == {}

    def test_region_omitted_when_not_configured(self, any_instance):
        endpoint = make_endpoint(WRITTEN_EVENT_TYPE, {}, PathPattern("a"), any_instance)

        assert "region" not in endpoint.to_dict()
        assert endpoint.region is None

    def test_region_list(self, any_instance):
        endpoint = make_endpoint(
            WRITTEN_EVENT_TYPE,
            {"region": ["us-east1", "europe-west1"]},
            PathPattern("a"),
            any_instance,
        )

        assert endpoint.to_dict()["region"] == ["us-east1", "europe-west1"]

    def test_pass_through_fields_use_manifest_names(self, any_instance):
        """Python option names are written with their manifest names."""
        endpoint = make_endpoint(
            WRITTEN_EVENT_TYPE,
            {
                "memory": "256MB",
                "timeout_seconds": 60,
                "min_instances": 1,
                "max_instances": 10,
                "vpc_connector": "connector",
                "vpc_connector_egress_settings": "ALL_TRAFFIC",
                "service_account": "sa@example.com",
                "ingress_settings": "ALLOW_ALL",
                "secrets": ["API_KEY"],
            },
            PathPattern("a"),
            any_instance,
        )

        manifest = endpoint.to_dict()
        assert manifest["memory"] == "256MB"
        assert manifest["timeoutSeconds"] == 60
        assert manifest["minInstances"] == 1
        assert manifest["maxInstances"] == 10
        assert manifest["vpcConnector"] == "connector"
        assert manifest["vpcConnectorEgressSettings"] == "ALL_TRAFFIC"
        assert manifest["serviceAccount"] == "sa@example.com"
        assert manifest["ingressSettings"] == "ALLOW_ALL"
        assert manifest["secrets"] == ["API_KEY"]

    def test_manifest_names_accepted_directly(self, any_instance):
        endpoint = make_endpoint(
            WRITTEN_EVENT_TYPE,
            {"minInstances": 2, "cpu": "gcf_gen1"},
            PathPattern("a"),
            any_instance,
        )

        assert endpoint.to_dict()["minInstances"] == 2
        assert endpoint.to_dict()["cpu"] == "gcf_gen1"

    def test_none_options_are_skipped(self, any_instance):
        endpoint = make_endpoint(
            WRITTEN_EVENT_TYPE,
            {"memory": None, "region": None},
            PathPattern("a"),
            any_instance,
        )

        assert "memory" not in endpoint.to_dict()
        assert "region" not in endpoint.to_dict()

    def test_accepts_normalized_options(self, any_instance):
        normalized = NormalizedOptions(path="a", opts={"region": "us-east1"})

        endpoint = make_endpoint(WRITTEN_EVENT_TYPE, normalized, PathPattern("a"), any_instance)

        assert endpoint.region == ("us-east1",)

    def test_retry_is_ignored_with_warning(self, any_instance, caplog):
        """retry is accepted but the manifest always disables it."""
        with caplog.at_level(logging.WARNING, logger="dbtrigger.triggers.endpoint"):
            endpoint = make_endpoint(
                WRITTEN_EVENT_TYPE, {"retry": True}, PathPattern("a"), any_instance
            )

        assert endpoint.event_trigger.retry is False
        assert "retry" not in endpoint.to_dict()
        assert "not configurable" in caplog.text

    def test_unknown_option_is_rejected(self, any_instance):
        with pytest.raises(ConfigurationError, match="Unsupported option 'colour'"):
            make_endpoint(WRITTEN_EVENT_TYPE, {"colour": "blue"}, PathPattern("a"), any_instance)

    def test_option_given_under_both_names_is_rejected(self, any_instance):
        with pytest.raises(ConfigurationError, match="more than once as 'minInstances'"):
            make_endpoint(
                WRITTEN_EVENT_TYPE,
                {"min_instances": 1, "minInstances": 2},
                PathPattern("a"),
                any_instance,
            )

    def test_region_must_be_string_or_list(self, any_instance):
        with pytest.raises(ConfigurationError, match="'region'"):
            make_endpoint(WRITTEN_EVENT_TYPE, {"region": 5}, PathPattern("a"), any_instance)


class TestManifestEndpoint:
    """Tests for the ManifestEndpoint model."""

    def test_is_immutable(self, any_instance):
        endpoint = make_endpoint(WRITTEN_EVENT_TYPE, {}, PathPattern("a"), any_instance)

        with pytest.raises(ValidationError):
            endpoint.platform = "other"

    def test_mappings_are_read_only(self, any_instance):
        """Nested manifest mappings cannot be changed in place."""
        endpoint = make_endpoint(
            WRITTEN_EVENT_TYPE,
            {"labels": {"a": "b"}, "memory": "256MB"},
            PathPattern("a"),
            PathPattern("my-instance"),
        )

        with pytest.raises(TypeError):
            endpoint.event_trigger.event_filter_path_patterns["ref"] = "other"
        with pytest.raises(TypeError):
            endpoint.event_trigger.event_filters["instance"] = "other"
        with pytest.raises(TypeError):
            endpoint.labels["a"] = "c"
        with pytest.raises(TypeError):
            endpoint.pass_through["memory"] = "1GB"

        assert endpoint.to_dict()["eventTrigger"]["eventFilterPathPatterns"] == {"ref": "a"}
        assert endpoint.to_dict()["memory"] == "256MB"

    def test_inputs_are_copied(self, any_instance):
        """Changing the option mappings after the build does not reach the endpoint."""
        labels = {"a": "b"}
        secrets = ["S"]
        endpoint = make_endpoint(
            WRITTEN_EVENT_TYPE,
            {"labels": labels, "secrets": secrets},
            PathPattern("a"),
            any_instance,
        )

        labels["x"] = "y"
        secrets.append("T")

        assert endpoint.labels == {"a": "b"}
        assert endpoint.pass_through["secrets"] == ("S",)

    def test_model_mappings_are_read_only(self):
        trigger = EventTrigger(event_type="t", event_filters={"instance": "db"})

        with pytest.raises(TypeError):
            trigger.event_filters["instance"] = "other"
        assert trigger.model_dump()["event_filters"] == {"instance": "db"}

    def test_to_dict_returns_fresh_copies(self, any_instance):
        """Mutating the wire dict does not touch the endpoint."""
        endpoint = make_endpoint(
            WRITTEN_EVENT_TYPE,
            {"labels": {"a": "b"}, "secrets": ["S"]},
            PathPattern("a"),
            any_instance,
        )

        manifest = endpoint.to_dict()
        manifest["labels"]["x"] = "y"
        manifest["secrets"].append("T")
        manifest["eventTrigger"]["eventFilters"]["instance"] = "z"

        assert endpoint.to_dict()["labels"] == {"a": "b"}
        assert endpoint.to_dict()["secrets"] == ["S"]
        assert endpoint.to_dict()["eventTrigger"]["eventFilters"] == {}

    def test_to_json_matches_to_dict(self, any_instance):
        endpoint = make_endpoint(WRITTEN_EVENT_TYPE, {}, PathPattern("a"), any_instance)

        assert endpoint.to_json() == endpoint.to_dict()

    def test_event_trigger_dumps_camel_case(self):
        trigger = EventTrigger(event_type="t", event_filter_path_patterns={"ref": "a"})

        assert trigger.model_dump(by_alias=True) == {
            "eventType": "t",
            "eventFilters": {},
            "eventFilterPathPatterns": {"ref": "a"},
            "retry": False,
        }

    def test_platform_default(self):
        endpoint = ManifestEndpoint(event_trigger=EventTrigger(event_type="t"))

        assert endpoint.platform == "gcfv2"
