"""Tests for KeyClassifier."""

import pytest

from forageconfig.tooling.classifier import KeyClassifier, ParsedKey


@pytest.fixture
def classifier(catalog):
    return KeyClassifier(catalog)


class TestClassificationRules:
    """Each rule, in isolation."""

    def test_direct_factory(self, classifier):
        assert classifier.classify("forage.jdbc.url") == ParsedKey("jdbc", "url", segment="jdbc")

    def test_root_token_optional(self, classifier):
        assert classifier.classify("jdbc.url") == classifier.classify("forage.jdbc.url")

    def test_direct_bean_kind(self, classifier):
        parsed = classifier.classify("forage.postgresql.url")

        assert parsed.factory_type == "jdbc"
        assert parsed.bean_kind == "postgresql"
        assert parsed.instance_name is None
        assert parsed.property_name == "url"

    def test_prefixed_factory(self, classifier):
        parsed = classifier.classify("forage.ds1.jdbc.pool.max.size")

        assert parsed == ParsedKey("jdbc", "pool.max.size", instance_name="ds1", segment="jdbc")

    def test_prefixed_bean_kind(self, classifier):
        parsed = classifier.classify("forage.chat.ollama.model.name")

        assert parsed.factory_type == "agent"
        assert parsed.instance_name == "chat"
        assert parsed.bean_kind == "ollama"
        assert parsed.property_name == "model.name"

    def test_property_prefix_alias_keeps_whole_key(self, classifier):
        parsed = classifier.classify("google.api.key")

        assert parsed == ParsedKey("agent", "google.api.key")

    def test_prefixed_property_prefix_alias(self, classifier):
        parsed = classifier.classify("forage.a1.google.api.key")

        assert parsed == ParsedKey("agent", "google.api.key", instance_name="a1")
        assert parsed.canonical_key("a1") == "forage.a1.google.api.key"

    @pytest.mark.parametrize("key", [
        "name",
        "bean.name",
        "camel.jbang.dependencies",
        "forage.ds1.jdbc",
        "forage.jdbc",
        "something.else.entirely",
    ])
    def test_unrecognized(self, classifier, key):
        assert classifier.classify(key) is None


class TestRuleOrder:
    """Earlier rules win over later ones."""

    def test_factory_key_not_taken_as_instance(self, classifier):
        parsed = classifier.classify("forage.jdbc.jms.url")

        assert parsed.factory_type == "jdbc"
        assert parsed.instance_name is None
        assert parsed.property_name == "jms.url"

    def test_bean_kind_not_taken_as_instance(self, classifier):
        parsed = classifier.classify("forage.mysql.jdbc.url")

        assert parsed.factory_type == "jdbc"
        assert parsed.bean_kind == "mysql"
        assert parsed.instance_name is None
        assert parsed.property_name == "jdbc.url"


class TestCanonicalKey:
    """Rebuilding keys for output."""

    def test_with_instance(self, classifier):
        parsed = classifier.classify("forage.jdbc.url")

        assert parsed.canonical_key("myPG") == "forage.myPG.jdbc.url"
        assert parsed.canonical_key() == "forage.jdbc.url"

    def test_alias_key(self, classifier):
        parsed = classifier.classify("google.api.key")

        assert parsed.canonical_key("gem") == "forage.gem.google.api.key"
