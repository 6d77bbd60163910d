"""
Rule configuration management.

Loads rule declarations from YAML files.
"""

from pathlib import Path
from typing import Any

import yaml

from fieldguard.core.models import RuleSpec
from fieldguard.observability.logger import get_logger

from .parser import apply_messages, parse_rules

logger = get_logger(__name__)


class RuleConfigLoader:
    """
    Loads rule declarations from YAML configuration files.

    Expected YAML format:
    ```yaml
    rules:
      email: "required|email"
      age:
        - required
        - int
        - min:18
      role:
        - rule: in
          params: [admin, editor]
          message: "Unknown role"

    messages:
      email.required: "Email is required"
    ```
    """

    def __init__(self, config_path: str | Path):
        """
        Initialize the rule config loader.

        Args:
            config_path: Path to the YAML configuration file
        """
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Rule configuration file not found: {config_path}")

    def load_rules(self) -> dict[str, RuleSpec]:
        """
        Load and parse rule declarations from the YAML file.

        Returns:
            Field name to RuleSpec, in file order, ready for the engine

        Raises:
            ValueError: If the YAML is missing the rules section or a field's
                rules are neither a string nor a list
            RuleDeclarationError: If a rule is malformed
        """
        with open(self.config_path) as f:
            config = yaml.safe_load(f)

        if not isinstance(config, dict) or not isinstance(config.get("rules"), dict):
            raise ValueError("Configuration file must contain a 'rules' mapping")

        declarations: dict[str, Any] = {}
        for field_name, field_rules in config["rules"].items():
            if not isinstance(field_rules, str | list):
                raise ValueError(f"Rules for field '{field_name}' must be a string or a list")
            declarations[str(field_name)] = field_rules

        messages = config.get("messages") or {}
        if not isinstance(messages, dict):
            raise ValueError("'messages' section must be a mapping of 'field.rule' to text")

        declarations = apply_messages(declarations, {str(k): str(v) for k, v in messages.items()})
        rules = {field_name: parse_rules(declaration) for field_name, declaration in declarations.items()}

        logger.info(f"Loaded rules for {len(rules)} fields from {self.config_path}")
        return rules
