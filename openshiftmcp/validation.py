"""
Parameter validation for oc tools.

Validators return a ValidationResult instead of raising so that several
checks can be combined with validate_multiple(); tools then call
ensure_valid() to raise InvalidParamError on the first failure.
"""

import json
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Optional, Union
from urllib.parse import urlparse

import yaml

from .errors import InvalidParamError

# DNS-1123 label
NAME_PATTERN = re.compile(r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?$")
RESOURCE_TYPE_PATTERN = re.compile(r"^[a-z0-9]([a-z0-9.-]*[a-z0-9])?$")
LABEL_SELECTOR_PATTERN = re.compile(
    r"^!?[a-zA-Z0-9._/-]+((=|==|!=)[a-zA-Z0-9._/-]*)?(,!?[a-zA-Z0-9._/-]+((=|==|!=)[a-zA-Z0-9._/-]*)?)*$"
)
TIMEOUT_PATTERN = re.compile(r"^(\d+)([smh])$")
SINCE_PATTERN = re.compile(r"^\d+[smhd]$")
LABEL_KEY_PATTERN = re.compile(r"^[a-zA-Z0-9._/-]+$")

MAX_NAME_LENGTH = 253
TIMEOUT_LIMITS = {"s": 3600, "m": 60, "h": 24}


@dataclass
class ValidationResult:
    """Outcome of a single validation check."""
    valid: bool
    error: Optional[str] = None
    warnings: List[str] = field(default_factory=list)


def ensure_valid(result: ValidationResult, param: str) -> List[str]:
    """Raise InvalidParamError if result failed; otherwise return its warnings."""
    if not result.valid:
        raise InvalidParamError(param, result.error or "invalid value")
    return result.warnings


def validate_required_params(params: Dict[str, Any], required_fields: Iterable[str]) -> ValidationResult:
    missing = [f for f in required_fields if params.get(f) in (None, "")]
    if missing:
        return ValidationResult(False, f"Missing required fields: {', '.join(missing)}")
    return ValidationResult(True)


def validate_resource_name(name: str) -> ValidationResult:
    """OpenShift resource names follow the DNS-1123 label format."""
    if not name or not isinstance(name, str):
        return ValidationResult(False, "Resource name must be a non-empty string")
    if len(name) > MAX_NAME_LENGTH:
        return ValidationResult(False, f"Resource name must be {MAX_NAME_LENGTH} characters or less")
    if not NAME_PATTERN.match(name):
        return ValidationResult(
            False,
            "Resource name must consist of lower case alphanumeric characters or hyphens, "
            "and must start and end with an alphanumeric character",
        )
    return ValidationResult(True)


def validate_namespace(namespace: str) -> ValidationResult:
    if not namespace or not isinstance(namespace, str):
        return ValidationResult(False, "Namespace must be a non-empty string")
    return validate_resource_name(namespace)


def validate_resource_type(resource_type: str) -> ValidationResult:
    if not resource_type or not isinstance(resource_type, str):
        return ValidationResult(False, "Resource type must be a non-empty string")
    if not RESOURCE_TYPE_PATTERN.match(resource_type):
        return ValidationResult(False, f"Invalid resource type format: {resource_type}")
    return ValidationResult(True)


def validate_label_selector(selector: Optional[str]) -> ValidationResult:
    """Basic key[=value] list check; set-based selectors are passed through."""
    if not selector:
        return ValidationResult(True)
    if " in " in selector or " notin " in selector:
        return ValidationResult(True)
    if not LABEL_SELECTOR_PATTERN.match(re.sub(r"\s", "", selector)):
        return ValidationResult(False, "Invalid label selector format. Use key=value pairs separated by commas")
    return ValidationResult(True)


def validate_url(url: str) -> ValidationResult:
    if not url or not isinstance(url, str):
        return ValidationResult(False, "URL must be a non-empty string")
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https"):
        return ValidationResult(False, "URL must use HTTP or HTTPS protocol")
    if not parsed.netloc:
        return ValidationResult(False, "Invalid URL format")
    return ValidationResult(True)


def validate_git_url(git_url: str) -> ValidationResult:
    result = validate_url(git_url)
    if not result.valid:
        return result
    parsed = urlparse(git_url)
    known_hosts = ("github.com", "gitlab.com", "bitbucket.org")
    if parsed.hostname not in known_hosts and ".git" not in parsed.path:
        return ValidationResult(
            True,
            warnings=["URL does not appear to be a Git repository. Ensure it points to a valid Git repository."],
        )
    return ValidationResult(True)


def validate_file_path(path: str, description: str = "File") -> ValidationResult:
    if not path or not isinstance(path, str):
        return ValidationResult(False, f"{description} path must be a non-empty string")
    if ".." in path or "~" in path:
        return ValidationResult(False, f"{description} path contains potentially unsafe characters")
    return ValidationResult(True)


def validate_hostname(hostname: Optional[str]) -> ValidationResult:
    """DNS-1123 subdomain, optionally with a leading "*." wildcard."""
    if not hostname:
        return ValidationResult(True)
    host = hostname[2:] if hostname.startswith("*.") else hostname
    if len(host) > MAX_NAME_LENGTH:
        return ValidationResult(False, f"Hostname must be {MAX_NAME_LENGTH} characters or less")
    if not all(NAME_PATTERN.match(label) and len(label) <= 63 for label in host.split(".")):
        return ValidationResult(False, f"Invalid hostname: {hostname}")
    return ValidationResult(True)


def validate_port(port: Union[str, int, None]) -> ValidationResult:
    """Port number (1-65535) or a DNS-1123 port name."""
    if port is None or port == "":
        return ValidationResult(True)
    if isinstance(port, int) or str(port).isdigit():
        number = int(port)
        if not 1 <= number <= 65535:
            return ValidationResult(False, "Port number must be between 1 and 65535")
        return ValidationResult(True)
    if not NAME_PATTERN.match(str(port)):
        return ValidationResult(False, "Port name must consist of lowercase alphanumeric characters and hyphens")
    return ValidationResult(True)


def validate_timeout(timeout: Optional[str]) -> ValidationResult:
    """Durations like "30s", "5m" or "1h"."""
    if not timeout:
        return ValidationResult(True)
    match = TIMEOUT_PATTERN.match(timeout)
    if not match:
        return ValidationResult(False, 'Timeout must be in format like "30s", "5m", or "1h"')
    value, unit = int(match.group(1)), match.group(2)
    if value <= 0:
        return ValidationResult(False, "Timeout value must be greater than 0")
    if value > TIMEOUT_LIMITS[unit]:
        return ValidationResult(False, f"Timeout value too large for unit {unit}")
    return ValidationResult(True)


def validate_since(since: Optional[str]) -> ValidationResult:
    if not since:
        return ValidationResult(True)
    if not SINCE_PATTERN.match(since):
        return ValidationResult(False, 'Since must be in format like "5s", "2m", "3h" or "1d"')
    return ValidationResult(True)


def validate_rfc3339(timestamp: Optional[str]) -> ValidationResult:
    if not timestamp:
        return ValidationResult(True)
    try:
        datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
    except ValueError:
        return ValidationResult(False, "Timestamp must be RFC3339, e.g. 2024-01-01T12:00:00Z")
    return ValidationResult(True)


def validate_key_value_pairs(pairs: Optional[List[str]], pair_type: str = "key-value pair") -> ValidationResult:
    """KEY=VALUE strings, as used for labels and environment variables."""
    if not pairs:
        return ValidationResult(True)
    warnings = []
    for pair in pairs:
        if not isinstance(pair, str) or "=" not in pair:
            return ValidationResult(False, f"Each {pair_type} must be in KEY=VALUE format")
        key = pair.split("=", 1)[0]
        if not key.strip():
            return ValidationResult(False, f"{pair_type} key cannot be empty")
        if not LABEL_KEY_PATTERN.match(key):
            warnings.append(f'Key "{key}" contains potentially invalid characters')
    return ValidationResult(True, warnings=warnings)


def validate_manifest_content(content: str) -> ValidationResult:
    """Manifest must parse as JSON or YAML and contain at least one mapping."""
    if not content or not isinstance(content, str):
        return ValidationResult(False, "Manifest content must be a non-empty string")
    if "{{" in content or "<%" in content:
        return ValidationResult(False, "Manifest content contains template syntax that may not be valid")
    try:
        json.loads(content)
        return ValidationResult(True)
    except ValueError:
        pass
    try:
        documents = [doc for doc in yaml.safe_load_all(content) if doc is not None]
    except yaml.YAMLError as e:
        return ValidationResult(False, f"Manifest is not valid JSON or YAML: {e}")
    if not documents or not all(isinstance(doc, dict) for doc in documents):
        return ValidationResult(False, "Manifest content does not appear to be valid JSON or YAML")
    warnings = [
        f"Document {i + 1} has no 'kind'" for i, doc in enumerate(documents) if "kind" not in doc
    ]
    return ValidationResult(True, warnings=warnings)


def validate_multiple(validations: Iterable[Callable[[], ValidationResult]]) -> ValidationResult:
    """Run every check and merge their errors and warnings."""
    errors: List[str] = []
    warnings: List[str] = []
    for check in validations:
        result = check()
        if not result.valid:
            errors.append(result.error or "invalid value")
        warnings.extend(result.warnings)
    if errors:
        return ValidationResult(False, "; ".join(errors), warnings)
    return ValidationResult(True, warnings=warnings)
