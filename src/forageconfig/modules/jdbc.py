"""Pooled JDBC data source configuration."""

from typing import Optional

from ..table import ConfigTag, ModuleConfig, ModuleParameterTable

TABLE = ModuleParameterTable("forage-datasource-factory")

NAME = TABLE.declare(
    "forage.jdbc.name", "Name of the data source instance", "Name",
    type="prefix", tag=ConfigTag.COMMON)
DB_KIND = TABLE.declare(
    "forage.jdbc.db.kind", "Database kind (postgresql, mysql, mariadb, ...)", "Database Kind",
    type="bean-name", required=True)
JDBC_URL = TABLE.declare(
    "forage.jdbc.url", "JDBC connection URL", "JDBC URL", required=True)
USERNAME = TABLE.declare(
    "forage.jdbc.username", "Database user", "Username", tag=ConfigTag.SECURITY)
PASSWORD = TABLE.declare(
    "forage.jdbc.password", "Database password", "Password",
    type="password", tag=ConfigTag.SECURITY)
INITIAL_SIZE = TABLE.declare(
    "forage.jdbc.pool.initial.size", "Initial pool size", "Initial Size",
    default="5", type="integer", tag=ConfigTag.ADVANCED)
MIN_SIZE = TABLE.declare(
    "forage.jdbc.pool.min.size", "Minimum pool size", "Min Size",
    default="2", type="integer", tag=ConfigTag.ADVANCED)
MAX_SIZE = TABLE.declare(
    "forage.jdbc.pool.max.size", "Maximum pool size", "Max Size",
    default="20", type="integer", tag=ConfigTag.ADVANCED)
ACQUISITION_TIMEOUT = TABLE.declare(
    "forage.jdbc.pool.acquisition.timeout.seconds", "Connection acquisition timeout in seconds",
    "Acquisition Timeout", default="5", type="integer", tag=ConfigTag.ADVANCED)
VALIDATION_TIMEOUT = TABLE.declare(
    "forage.jdbc.pool.validation.timeout.seconds", "Connection validation timeout in seconds",
    "Validation Timeout", default="3", type="integer", tag=ConfigTag.ADVANCED)
LEAK_TIMEOUT = TABLE.declare(
    "forage.jdbc.pool.leak.timeout.minutes", "Connection leak detection timeout in minutes",
    "Leak Timeout", default="10", type="integer", tag=ConfigTag.ADVANCED)
IDLE_VALIDATION_TIMEOUT = TABLE.declare(
    "forage.jdbc.pool.idle.validation.timeout.minutes", "Idle connection validation timeout in minutes",
    "Idle Validation Timeout", default="3", type="integer", tag=ConfigTag.ADVANCED)
TRANSACTION_ENABLED = TABLE.declare(
    "forage.jdbc.transaction.enabled", "Enable transaction management", "Transactions",
    default="false", type="boolean")
TRANSACTION_TIMEOUT = TABLE.declare(
    "forage.jdbc.transaction.timeout.seconds", "Transaction timeout in seconds",
    "Transaction Timeout", default="30", type="integer", tag=ConfigTag.ADVANCED)
AGGREGATION_ENABLED = TABLE.declare(
    "forage.jdbc.aggregation.repository.enabled", "Create a JDBC aggregation repository",
    "Aggregation Repository", default="false", type="boolean", tag=ConfigTag.ADVANCED)
AGGREGATION_NAME = TABLE.declare(
    "forage.jdbc.aggregation.repository.name", "Aggregation repository table name",
    "Aggregation Repository Name", tag=ConfigTag.ADVANCED)
IDEMPOTENT_ENABLED = TABLE.declare(
    "forage.jdbc.idempotent.repository.enabled", "Create a JDBC idempotent repository",
    "Idempotent Repository", default="false", type="boolean", tag=ConfigTag.ADVANCED)
IDEMPOTENT_PROCESSOR_NAME = TABLE.declare(
    "forage.jdbc.idempotent.repository.processor.name", "Processor name of the idempotent repository",
    "Idempotent Processor Name", default="idempotent", tag=ConfigTag.ADVANCED)

FACTORY_KEY = "jdbc"


class DataSourceConfig(ModuleConfig):
    """Configuration of one pooled data source."""

    table = TABLE

    def db_kind(self) -> str:
        return self._require_str(DB_KIND)

    def jdbc_url(self) -> str:
        return self._require_str(JDBC_URL)

    def username(self) -> Optional[str]:
        return self._get_str(USERNAME)

    def password(self) -> Optional[str]:
        return self._get_str(PASSWORD)

    def initial_size(self) -> int:
        return self._get_int(INITIAL_SIZE)

    def min_size(self) -> int:
        return self._get_int(MIN_SIZE)

    def max_size(self) -> int:
        return self._get_int(MAX_SIZE)

    def acquisition_timeout_seconds(self) -> int:
        return self._get_int(ACQUISITION_TIMEOUT)

    def validation_timeout_seconds(self) -> int:
        return self._get_int(VALIDATION_TIMEOUT)

    def leak_timeout_minutes(self) -> int:
        return self._get_int(LEAK_TIMEOUT)

    def idle_validation_timeout_minutes(self) -> int:
        return self._get_int(IDLE_VALIDATION_TIMEOUT)

    def transaction_enabled(self) -> bool:
        return self._get_bool(TRANSACTION_ENABLED)

    def transaction_timeout_seconds(self) -> int:
        return self._get_int(TRANSACTION_TIMEOUT)

    def aggregation_repository_enabled(self) -> bool:
        return self._get_bool(AGGREGATION_ENABLED)

    def aggregation_repository_name(self) -> Optional[str]:
        return self._get_str(AGGREGATION_NAME)

    def idempotent_repository_enabled(self) -> bool:
        return self._get_bool(IDEMPOTENT_ENABLED)

    def idempotent_processor_name(self) -> str:
        return self._get_str(IDEMPOTENT_PROCESSOR_NAME)

    def named_instances(self) -> set[str]:
        return self.discover_instances(FACTORY_KEY)
