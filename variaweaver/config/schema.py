"""
VariaWeaver v0.1.0

Configuration schema for VariaWeaver.

Defines all available configuration parameters with defaults and validation.

Author: VariaWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import copy
from typing import Dict, Any, Optional, List
from pathlib import Path
import yaml


class ConfigValidationError(Exception):
    """Raised when a configuration file cannot be read."""
    pass


# Default configuration values
DEFAULT_CONFIG = {
    # ========================================================================
    # Sample Graph Extraction
    # ========================================================================
    'sample_graph': {
        'alt_path_prefix': '_alt_',  # Allele paths are <prefix><variant>_<allele>
        'sample': None,  # Required when the VCF has several samples
        'skip_non_acgt': True,  # Ignore records with alleles outside A/C/G/T
        'drop_allele_paths': True,  # Remove surviving allele paths afterwards
    },

    # ========================================================================
    # Graph Cleanup
    # ========================================================================
    'graph_ops': {
        'remove_orphans': False,  # Remove edges with a missing endpoint
        'remove_non_path': False,  # Keep only nodes/edges walked by paths
    },

    # ========================================================================
    # Output
    # ========================================================================
    'output': {
        # Logging
        'logging': {
            'level': 'INFO',  # 'DEBUG', 'INFO', 'WARNING', 'ERROR'
            'log_file': None,  # Log to stderr only by default
        },
    },
}

TEMPLATES = ('default', 'sample', 'cleanup')
VALID_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load configuration from file or return defaults.

    Args:
        config_path: Path to YAML config file (None = use defaults)

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If config_path is given but missing
        ConfigValidationError: If the file is not valid YAML or not a mapping
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_path:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path) as f:
                user_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigValidationError(f"Invalid YAML in config file {config_path}: {e}")

        if user_config is None:
            return config
        if not isinstance(user_config, dict):
            raise ConfigValidationError(f"Config file {config_path} must contain a mapping")

        # Deep merge user config into defaults
        config = _deep_merge(config, user_config)

    return config


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary
        override: Override dictionary

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def save_config_template(output_path: Path, template: str = 'default'):
    """
    Save a configuration template to file.

    Args:
        output_path: Output file path
        template: Template type ('default', 'sample', 'cleanup')
    """
    if template not in TEMPLATES:
        raise ValueError(f"Unknown template: {template} (choose from {', '.join(TEMPLATES)})")

    config = copy.deepcopy(DEFAULT_CONFIG)

    # Customize for specific templates
    if template == 'sample':
        config['sample_graph']['sample'] = 'SAMPLE'
        config['graph_ops']['remove_orphans'] = True

    elif template == 'cleanup':
        config['graph_ops']['remove_orphans'] = True
        config['graph_ops']['remove_non_path'] = True

    with open(output_path, 'w') as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration dictionary.

    Args:
        config: Configuration to validate

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    # Sections must be mappings before their keys can be checked
    sections = {
        'sample_graph': config.get('sample_graph'),
        'graph_ops': config.get('graph_ops'),
        'output': config.get('output'),
    }
    if isinstance(sections['output'], dict):
        sections['output.logging'] = sections['output'].get('logging')
    for name, section in sections.items():
        if not isinstance(section, dict):
            errors.append(f"{name} must be a mapping, got {type(section).__name__}")
    if errors:
        return errors

    sample_graph = config['sample_graph']
    prefix = sample_graph.get('alt_path_prefix')
    if not isinstance(prefix, str) or not prefix:
        errors.append("sample_graph.alt_path_prefix must be a non-empty string")

    sample = sample_graph.get('sample')
    if sample is not None and not isinstance(sample, str):
        errors.append(f"sample_graph.sample must be a string or null, got {type(sample).__name__}")

    for key in ('skip_non_acgt', 'drop_allele_paths'):
        if not isinstance(sample_graph.get(key), bool):
            errors.append(f"sample_graph.{key} must be true or false")

    for key in ('remove_orphans', 'remove_non_path'):
        if not isinstance(config['graph_ops'].get(key), bool):
            errors.append(f"graph_ops.{key} must be true or false")

    # Validate logging
    logging_cfg = sections['output.logging']
    level = logging_cfg.get('level')
    if str(level).upper() not in VALID_LOG_LEVELS:
        errors.append(f"Invalid logging level: {level}")

    log_file = logging_cfg.get('log_file')
    if log_file is not None and not isinstance(log_file, str):
        errors.append("output.logging.log_file must be a path string or null")
    elif log_file and not Path(log_file).parent.exists():
        errors.append(f"Log file directory not found: {Path(log_file).parent}")

    return errors
