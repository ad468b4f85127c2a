# Core data models for mcpstack
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Literal

# ABOUTME: Doctor statuses ordered by severity, used for escalate-only updates
Status = Literal["healthy", "warning", "error"]
STATUS_SEVERITY: dict[str, int] = {"healthy": 0, "warning": 1, "error": 2}


@dataclass(frozen=True)
class ServerConfig:
    """Concrete MCP server entry as written to .mcp.json.

    ABOUTME: Uses frozen dataclass to prevent accidental mutation
    ABOUTME: stdio servers set command/args/env, HTTP servers set type/url/headers
    ABOUTME: Absent fields stay None so they are omitted on write
    """
    command: str | None = None
    args: list[str] | None = None
    env: dict[str, str] | None = None
    type: Literal["http", "sse"] | None = None
    url: str | None = None
    headers: dict[str, str] | None = None

    @property
    def is_stdio(self) -> bool:
        return self.command is not None

    @property
    def is_http(self) -> bool:
        return self.type is not None and self.url is not None


@dataclass
class ConfigFile:
    """Contents of a project's .mcp.json.

    ABOUTME: Servers dict uses connector name as key, insertion order is file order
    """
    servers: dict[str, ServerConfig] = field(default_factory=dict)


@dataclass(frozen=True)
class ProbeResult:
    """Outcome of a connector validation probe."""
    valid: bool
    message: str
    details: str | None = None


# ABOUTME: A probe receives the credential lookup explicitly instead of reading os.environ
Probe = Callable[[Mapping[str, str]], ProbeResult]


@dataclass(frozen=True)
class ConnectorDefinition:
    """Registry entry describing how to configure one connector.

    ABOUTME: config is a template whose strings may hold ${VAR} tokens
    ABOUTME: probe is optional; connectors without one skip the connection check
    """
    name: str
    description: str
    config: ServerConfig
    required_env: list[str] = field(default_factory=list)
    optional_env: list[str] = field(default_factory=list)
    env_hints: dict[str, str] = field(default_factory=dict)
    setup_hint: str | None = None
    probe: Probe | None = None

    @property
    def needs_credentials(self) -> bool:
        return bool(self.required_env or self.optional_env)


@dataclass(frozen=True)
class StackTemplate:
    """Named bundle of connectors for a common project archetype."""
    name: str
    description: str
    mcps: list[str]
    detection_files: list[str] = field(default_factory=list)
    detection_dependencies: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class DetectionRule:
    """Marker files and dependency names that suggest connectors.

    ABOUTME: Rule fires if any file exists or any dependency is declared
    """
    suggest: list[str]
    files: list[str] = field(default_factory=list)
    dependencies: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Detection:
    connector: str
    reason: str


@dataclass
class DetectionReport:
    """Result of scanning a project directory.

    ABOUTME: detected keeps the first reason recorded for each connector
    ABOUTME: suggested is deduplicated and in first-seen order
    """
    detected: list[Detection] = field(default_factory=list)
    suggested: list[str] = field(default_factory=list)

    def add(self, connector: str, reason: str) -> None:
        """Record a suggestion unless the connector was already suggested."""
        if connector in self.suggested:
            return
        self.detected.append(Detection(connector=connector, reason=reason))
        self.suggested.append(connector)


@dataclass(frozen=True)
class DoctorCheck:
    name: str
    passed: bool
    message: str


@dataclass
class DoctorResult:
    """Checks run against one configured connector.

    ABOUTME: Status only escalates (healthy -> warning -> error)
    """
    connector: str
    status: Status = "healthy"
    checks: list[DoctorCheck] = field(default_factory=list)

    def escalate(self, status: Status) -> None:
        if STATUS_SEVERITY[status] > STATUS_SEVERITY[self.status]:
            self.status = status

    def add_check(self, name: str, passed: bool, message: str) -> None:
        self.checks.append(DoctorCheck(name=name, passed=passed, message=message))
