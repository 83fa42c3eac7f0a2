"""JMS connection factory configuration."""

from typing import Optional

from ..table import ConfigTag, ModuleConfig, ModuleParameterTable

TABLE = ModuleParameterTable("forage-connectionfactory")

NAME = TABLE.declare(
    "forage.jms.name", "Name of the connection factory instance", "Name", type="prefix")
KIND = TABLE.declare(
    "forage.jms.kind", "Broker kind (artemis, ibmmq)", "Kind", type="bean-name", required=True)
BROKER_URL = TABLE.declare(
    "forage.jms.broker.url", "Broker URL", "Broker URL", required=True)
USERNAME = TABLE.declare(
    "forage.jms.username", "Broker user", "Username", tag=ConfigTag.SECURITY)
PASSWORD = TABLE.declare(
    "forage.jms.password", "Broker password", "Password", type="password", tag=ConfigTag.SECURITY)
POOL_ENABLED = TABLE.declare(
    "forage.jms.pool.enabled", "Pool connections", "Pooling",
    default="false", type="boolean", tag=ConfigTag.ADVANCED)
POOL_MAX_CONNECTIONS = TABLE.declare(
    "forage.jms.pool.max.connections", "Maximum pooled connections", "Max Connections",
    default="1", type="integer", tag=ConfigTag.ADVANCED)
TRANSACTION_ENABLED = TABLE.declare(
    "forage.jms.transaction.enabled", "Enable transacted sessions", "Transactions",
    default="false", type="boolean")


class ConnectionFactoryConfig(ModuleConfig):
    table = TABLE

    def kind(self) -> str:
        return self._require_str(KIND)

    def broker_url(self) -> str:
        return self._require_str(BROKER_URL)

    def username(self) -> Optional[str]:
        return self._get_str(USERNAME)

    def password(self) -> Optional[str]:
        return self._get_str(PASSWORD)

    def pool_enabled(self) -> bool:
        return self._get_bool(POOL_ENABLED)

    def pool_max_connections(self) -> int:
        return self._get_int(POOL_MAX_CONNECTIONS)

    def transaction_enabled(self) -> bool:
        return self._get_bool(TRANSACTION_ENABLED)
