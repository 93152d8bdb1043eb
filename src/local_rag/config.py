"""Configuration loading and deterministic merge order."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

CONFIG_FILE_NAME = "local_rag.toml"
DEFAULT_DATA_DIR_NAME = ".local_rag"

DEFAULT_MAX_FILE_BYTES = 1024 * 1024
MAX_FILE_BYTES_CAP = 4 * 1024 * 1024
MAX_RESULTS_CAP = 100
MAX_TOKENS_CAP = 1_000_000

DEFAULT_EXCLUDE_DIR_NAMES = (
    ".git",
    "node_modules",
    "dist",
    "build",
    "__pycache__",
    ".venv",
)
DEFAULT_IGNORE_FILE_NAME = ".ragignore"


@dataclass(slots=True, frozen=True)
class IndexConfig:
    """Deterministic indexing settings."""

    exclude_dir_names: tuple[str, ...] = DEFAULT_EXCLUDE_DIR_NAMES
    max_file_bytes: int = DEFAULT_MAX_FILE_BYTES


@dataclass(slots=True, frozen=True)
class RetrievalConfig:
    """Default query limits."""

    max_results: int = 5
    context_max_results: int = 10
    max_tokens: int = 10_000


@dataclass(slots=True, frozen=True)
class AccessConfig:
    """Access filter settings."""

    ignore_file_name: str = DEFAULT_IGNORE_FILE_NAME
    deny_sensitive: bool = True


@dataclass(slots=True, frozen=True)
class RagConfig:
    """Fully merged service configuration."""

    roots: tuple[Path, ...]
    data_dir: Path
    index: IndexConfig
    retrieval: RetrievalConfig
    access: AccessConfig

    @property
    def store_path(self) -> Path:
        """Location of the durable document store."""
        return self.data_dir / "index.json"

    @property
    def event_log_path(self) -> Path:
        """Location of the JSONL event log."""
        return self.data_dir / "events.jsonl"

    def to_public_dict(self) -> dict[str, object]:
        """Return serializable config snapshot for tool responses."""
        return {
            "roots": [str(root) for root in self.roots],
            "data_dir": str(self.data_dir),
            "index": {
                "exclude_dir_names": list(self.index.exclude_dir_names),
                "max_file_bytes": self.index.max_file_bytes,
            },
            "retrieval": {
                "max_results": self.retrieval.max_results,
                "context_max_results": self.retrieval.context_max_results,
                "max_tokens": self.retrieval.max_tokens,
            },
            "access": {
                "ignore_file_name": self.access.ignore_file_name,
                "deny_sensitive": self.access.deny_sensitive,
            },
        }


@dataclass(slots=True, frozen=True)
class CliOverrides:
    """Optional startup overrides applied at highest precedence."""

    data_dir: Path | None = None
    max_file_bytes: int | None = None
    max_results: int | None = None
    max_tokens: int | None = None
    deny_sensitive: bool | None = None


def default_config(roots: tuple[Path, ...]) -> RagConfig:
    """Build default config for the given workspace roots."""
    if not roots:
        raise ValueError("At least one workspace root is required.")
    resolved = tuple(root.resolve() for root in roots)
    return RagConfig(
        roots=resolved,
        data_dir=resolved[0] / DEFAULT_DATA_DIR_NAME,
        index=IndexConfig(),
        retrieval=RetrievalConfig(),
        access=AccessConfig(),
    )


def load_config_file(root: Path) -> dict[str, object]:
    """Load optional local_rag.toml from a workspace root."""
    config_path = root / CONFIG_FILE_NAME
    if not config_path.exists():
        return {}
    with config_path.open("rb") as handle:
        payload = tomllib.load(handle)
    if not isinstance(payload, dict):
        raise ValueError(f"{CONFIG_FILE_NAME} must contain a top-level table.")
    return payload


def merge_config(
    base: RagConfig, payload: dict[str, object], overrides: CliOverrides
) -> RagConfig:
    """Merge defaults, file config, then CLI/startup overrides."""
    index_payload = _get_table(payload, "index")
    retrieval_payload = _get_table(payload, "retrieval")
    access_payload = _get_table(payload, "access")

    exclude_dir_names = base.index.exclude_dir_names
    if "exclude_dir_names" in index_payload:
        exclude_dir_names = _tuple_of_strings(
            index_payload["exclude_dir_names"], "index", "exclude_dir_names"
        )
    max_file_bytes = _optional_positive_int_with_cap(
        index_payload.get("max_file_bytes"),
        "index.max_file_bytes",
        base.index.max_file_bytes,
        MAX_FILE_BYTES_CAP,
    )

    max_results = _optional_positive_int_with_cap(
        retrieval_payload.get("max_results"),
        "retrieval.max_results",
        base.retrieval.max_results,
        MAX_RESULTS_CAP,
    )
    context_max_results = _optional_positive_int_with_cap(
        retrieval_payload.get("context_max_results"),
        "retrieval.context_max_results",
        base.retrieval.context_max_results,
        MAX_RESULTS_CAP,
    )
    max_tokens = _optional_positive_int_with_cap(
        retrieval_payload.get("max_tokens"),
        "retrieval.max_tokens",
        base.retrieval.max_tokens,
        MAX_TOKENS_CAP,
    )

    ignore_file_name = base.access.ignore_file_name
    if "ignore_file_name" in access_payload:
        raw_name = access_payload["ignore_file_name"]
        if not isinstance(raw_name, str) or not raw_name.strip() or "/" in raw_name:
            raise ValueError("Config field 'access.ignore_file_name' must be a plain file name.")
        ignore_file_name = raw_name.strip()
    deny_sensitive = base.access.deny_sensitive
    if "deny_sensitive" in access_payload:
        raw_deny = access_payload["deny_sensitive"]
        if not isinstance(raw_deny, bool):
            raise ValueError("Config field 'access.deny_sensitive' must be a boolean.")
        deny_sensitive = raw_deny

    merged = RagConfig(
        roots=base.roots,
        data_dir=base.data_dir,
        index=IndexConfig(exclude_dir_names=exclude_dir_names, max_file_bytes=max_file_bytes),
        retrieval=RetrievalConfig(
            max_results=max_results,
            context_max_results=context_max_results,
            max_tokens=max_tokens,
        ),
        access=AccessConfig(ignore_file_name=ignore_file_name, deny_sensitive=deny_sensitive),
    )
    return apply_cli_overrides(merged, overrides)


def apply_cli_overrides(config: RagConfig, overrides: CliOverrides) -> RagConfig:
    """Apply startup overrides at highest precedence."""
    max_file_bytes = _optional_positive_int_with_cap(
        overrides.max_file_bytes,
        "overrides.max_file_bytes",
        config.index.max_file_bytes,
        MAX_FILE_BYTES_CAP,
    )
    max_results = _optional_positive_int_with_cap(
        overrides.max_results,
        "overrides.max_results",
        config.retrieval.max_results,
        MAX_RESULTS_CAP,
    )
    max_tokens = _optional_positive_int_with_cap(
        overrides.max_tokens,
        "overrides.max_tokens",
        config.retrieval.max_tokens,
        MAX_TOKENS_CAP,
    )
    deny_sensitive = (
        overrides.deny_sensitive
        if overrides.deny_sensitive is not None
        else config.access.deny_sensitive
    )
    data_dir = overrides.data_dir or config.data_dir
    return RagConfig(
        roots=config.roots,
        data_dir=data_dir.resolve(),
        index=IndexConfig(
            exclude_dir_names=config.index.exclude_dir_names,
            max_file_bytes=max_file_bytes,
        ),
        retrieval=RetrievalConfig(
            max_results=max_results,
            context_max_results=config.retrieval.context_max_results,
            max_tokens=max_tokens,
        ),
        access=AccessConfig(
            ignore_file_name=config.access.ignore_file_name,
            deny_sensitive=deny_sensitive,
        ),
    )


def load_effective_config(
    roots: list[Path] | tuple[Path, ...], overrides: CliOverrides | None = None
) -> RagConfig:
    """Load effective config using merge order defaults -> file config -> overrides."""
    base = default_config(tuple(roots))
    payload = load_config_file(base.roots[0])
    return merge_config(base, payload, overrides or CliOverrides())


def _get_table(payload: dict[str, object], key: str) -> dict[str, object]:
    value = payload.get(key, {})
    if not isinstance(value, dict):
        raise ValueError(f"Config section '{key}' must be a table.")
    return value


def _tuple_of_strings(value: object, section: str, field: str) -> tuple[str, ...]:
    if not isinstance(value, list):
        raise ValueError(f"Config field '{section}.{field}' must be a list of strings.")
    output: list[str] = []
    for item in value:
        if not isinstance(item, str):
            raise ValueError(f"Config field '{section}.{field}' must contain only strings.")
        output.append(item)
    return tuple(output)


def _optional_positive_int_with_cap(
    value: object,
    name: str,
    default: int,
    cap: int | None,
) -> int:
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError(f"Config field '{name}' must be a positive integer.")
    if cap is not None and value > cap:
        raise ValueError(f"Config field '{name}' must be <= {cap}.")
    return value
