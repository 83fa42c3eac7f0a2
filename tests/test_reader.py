"""Tests for ConfigReader."""

import pytest

from forageconfig.tooling.reader import ConfigReader
from forageconfig.tooling.results import ErrorResult, FileStrategy
from forageconfig.tooling.writer import ConfigWriter
from forageconfig.testing import write_properties


def _read(catalog, directory, **kwargs):
    return ConfigReader(catalog, directory, **kwargs).read()


class TestRead:
    """Describing configured beans."""

    def test_written_instance_round_trips(self, catalog, tmp_path, pg_batch):
        ConfigWriter(catalog, tmp_path).write(pg_batch)

        result = _read(catalog, tmp_path)

        assert result.success is True
        assert result.bean_count == 1
        bean = result.beans[0]
        assert bean.name == "myPG"
        assert bean.kind == "postgresql"
        assert bean.java_type == "javax.sql.DataSource"
        assert bean.configuration == {
            "db.kind": "postgresql",
            "url": "jdbc:postgresql://localhost:5432/pg",
        }
        assert bean.conditional_beans is None

    def test_named_alias_keys_round_trip(self, catalog, tmp_path):
        ConfigWriter(catalog, tmp_path).write({
            "google.api.key": "k",
            "forage.agent.model.kind": "google-gemini",
            "forage.bean.name": "a1",
        })

        result = _read(catalog, tmp_path)

        assert result.bean_count == 1
        bean = result.beans[0]
        assert bean.name == "a1"
        assert bean.configuration == {
            "google.api.key": "k",
            "model.kind": "google-gemini",
        }

    def test_two_instances(self, catalog, tmp_path, pg_batch, mariadb_batch):
        writer = ConfigWriter(catalog, tmp_path)
        writer.write(pg_batch)
        writer.write(mariadb_batch)

        result = _read(catalog, tmp_path)

        assert [b.name for b in result.beans] == ["myPG", "myMariaDB"]
        assert [b.kind for b in result.beans] == ["postgresql", "mariadb"]

    def test_default_bean_name(self, catalog, tmp_path):
        write_properties(
            tmp_path / "application.properties",
            "forage.jdbc.db.kind=h2",
            "forage.jdbc.url=jdbc:h2:mem:test",
        )

        bean = _read(catalog, tmp_path).beans[0]

        assert bean.name == "dataSource"
        assert bean.kind == "h2"

    def test_conditional_beans(self, catalog, tmp_path):
        write_properties(
            tmp_path / "application.properties",
            "forage.ds.jdbc.db.kind=postgresql",
            "forage.ds.jdbc.transaction.enabled=true",
            "forage.ds.jdbc.aggregation.repository.enabled=true",
            "forage.ds.jdbc.aggregation.repository.name=myAgg",
            "forage.ds.jdbc.idempotent.repository.enabled=false",
        )

        bean = _read(catalog, tmp_path).beans[0]

        assert [c.name for c in bean.conditional_beans] == [
            "PROPAGATION_REQUIRED",
            "PROPAGATION_REQUIRES_NEW",
            "myAgg",
        ]
        assert bean.conditional_beans[2].java_type == (
            "org.apache.camel.processor.aggregate.jdbc.JdbcAggregationRepository"
        )

    def test_chat_model_bean(self, catalog, tmp_path):
        write_properties(
            tmp_path / "application.properties",
            "forage.ollama.base.url=http://localhost:11434",
            "forage.ollama.model.name=llama3",
        )

        bean = _read(catalog, tmp_path).beans[0]

        assert bean.name == "agent"
        assert bean.kind == "ollama"
        assert bean.java_type == "dev.langchain4j.model.chat.ChatLanguageModel"
        assert bean.configuration == {
            "base.url": "http://localhost:11434",
            "model.name": "llama3",
        }

    def test_filter(self, catalog, tmp_path):
        write_properties(
            tmp_path / "application.properties",
            "forage.ds.jdbc.db.kind=postgresql",
            "forage.broker.jms.kind=artemis",
            "forage.broker.jms.broker.url=tcp://localhost:61616",
        )

        result = _read(catalog, tmp_path, factory_filter="JMS")

        assert result.bean_count == 1
        assert result.beans[0].name == "broker"
        assert result.beans[0].java_type == "jakarta.jms.ConnectionFactory"

    def test_nested_files_are_found(self, catalog, tmp_path):
        nested = tmp_path / "src" / "main" / "resources"
        nested.mkdir(parents=True)
        write_properties(nested / "application.properties", "forage.jdbc.db.kind=h2")

        result = _read(catalog, tmp_path)

        assert result.bean_count == 1
        assert result.beans[0].source_file.endswith("application.properties")

    def test_forage_strategy(self, catalog, tmp_path, pg_batch):
        ConfigWriter(catalog, tmp_path, FileStrategy.FORAGE).write(pg_batch)

        result = _read(catalog, tmp_path, strategy=FileStrategy.FORAGE)

        assert result.bean_count == 1
        assert result.beans[0].source_file.endswith("forage-datasource-factory.properties")

    def test_non_forage_keys_ignored(self, catalog, tmp_path):
        write_properties(tmp_path / "application.properties", "camel.main.name=demo")

        result = _read(catalog, tmp_path)

        assert result.bean_count == 0
        assert result.beans == []

    def test_no_files(self, catalog, tmp_path):
        result = _read(catalog, tmp_path)

        assert result.success is True
        assert result.message == "No Forage properties files found"
        assert result.bean_count == 0

    def test_missing_directory(self, catalog, tmp_path):
        result = _read(catalog, tmp_path / "missing")

        assert isinstance(result, ErrorResult)
        assert result.error.startswith("Directory does not exist: ")


class TestJsonEnvelope:
    """Shape of the printed read result."""

    def test_bean_fields(self, catalog, tmp_path, pg_batch):
        ConfigWriter(catalog, tmp_path).write(pg_batch)

        data = _read(catalog, tmp_path).to_json_dict()

        assert data["beanCount"] == 1
        bean = data["beans"][0]
        assert set(bean) == {"name", "kind", "javaType", "sourceFile", "configuration"}

    @pytest.mark.parametrize("enabled", ["true", "TRUE"])
    def test_conditional_beans_serialized(self, catalog, tmp_path, enabled):
        write_properties(
            tmp_path / "application.properties",
            "forage.jdbc.db.kind=h2",
            f"forage.jdbc.transaction.enabled={enabled}",
        )

        bean = _read(catalog, tmp_path).to_json_dict()["beans"][0]

        assert bean["conditionalBeans"][0]["name"] == "PROPAGATION_REQUIRED"
        assert bean["conditionalBeans"][0]["javaType"].endswith("SpringTransactionPolicy")
