"""Ollama chat model configuration."""

from datetime import timedelta
from typing import Optional

from ..table import ConfigTag, ModuleConfig, ModuleParameterTable

TABLE = ModuleParameterTable("forage-model-ollama")

BASE_URL = TABLE.declare(
    "forage.ollama.base.url", "Ollama server URL", "Base URL", default="http://localhost:11434")
MODEL_NAME = TABLE.declare(
    "forage.ollama.model.name", "Model to use", "Model Name", default="llama3")
TEMPERATURE = TABLE.declare(
    "forage.ollama.temperature", "Sampling temperature", "Temperature",
    type="double", tag=ConfigTag.ADVANCED)
TOP_K = TABLE.declare(
    "forage.ollama.top.k", "Top-k sampling", "Top K", type="integer", tag=ConfigTag.ADVANCED)
TOP_P = TABLE.declare(
    "forage.ollama.top.p", "Top-p sampling", "Top P", type="double", tag=ConfigTag.ADVANCED)
MAX_RETRIES = TABLE.declare(
    "forage.ollama.max.retries", "Maximum retries", "Max Retries",
    type="integer", tag=ConfigTag.ADVANCED)
TIMEOUT = TABLE.declare(
    "forage.ollama.timeout", "Request timeout (ISO-8601 duration or seconds)", "Timeout",
    type="duration", tag=ConfigTag.ADVANCED)
LOG_REQUESTS = TABLE.declare(
    "forage.ollama.log.requests", "Log requests", "Log Requests",
    default="false", type="boolean", tag=ConfigTag.ADVANCED)
LOG_RESPONSES = TABLE.declare(
    "forage.ollama.log.responses", "Log responses", "Log Responses",
    default="false", type="boolean", tag=ConfigTag.ADVANCED)


class OllamaConfig(ModuleConfig):
    table = TABLE

    def base_url(self) -> str:
        return self._get_str(BASE_URL)

    def model_name(self) -> str:
        return self._get_str(MODEL_NAME)

    def temperature(self) -> Optional[float]:
        return self._get_float(TEMPERATURE)

    def top_k(self) -> Optional[int]:
        return self._get_int(TOP_K)

    def top_p(self) -> Optional[float]:
        return self._get_float(TOP_P)

    def max_retries(self) -> Optional[int]:
        return self._get_int(MAX_RETRIES)

    def timeout(self) -> timedelta:
        """Request timeout; raises ``MissingConfigError`` when unset."""
        return self._get_duration(TIMEOUT, required=True)

    def log_requests(self) -> bool:
        return self._get_bool(LOG_REQUESTS)

    def log_responses(self) -> bool:
        return self._get_bool(LOG_RESPONSES)
