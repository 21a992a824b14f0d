#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Command-line interface for VariaWeaver.

This module provides the main CLI entry point and all subcommands for
editing variation graphs and extracting sample graphs.
"""

import json
import sys
import click
from pathlib import Path
import yaml

from .version import __version__
from .config.schema import (
    ConfigValidationError, TEMPLATES, load_config, save_config_template, validate_config,
)
from .graph_core.graph_ops import GraphModOptions, apply_modifications
from .io_utils.gfa_io import load_graph_from_gfa, export_graph_to_gfa, write_gfa
from .io_utils.vcf_source import VcfVariantSource
from .sample_graph.allele_paths import AllelePathIndex
from .sample_graph.errors import SampleGraphError
from .sample_graph.extractor import extract_sample_graph
from .utils.logging_setup import configure_logging, resolve_level


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.option('--quiet', '-q', is_flag=True, help='Suppress non-error output')
@click.pass_context
def main(ctx, verbose, quiet):
    """
    VariaWeaver: Variation Graph Toolkit

    Edit variation graphs stored as GFA and reduce graphs carrying allele
    paths to the subgraph used by one sample's genotype calls.
    """
    # Ensure context object exists
    ctx.ensure_object(dict)
    ctx.obj['VERBOSE'] = verbose
    ctx.obj['QUIET'] = quiet


def _setup_logging(ctx, config):
    """Configure logging from the config file and the global flags."""
    logging_cfg = config['output']['logging']
    level = resolve_level(
        logging_cfg['level'],
        verbose=ctx.obj.get('VERBOSE', False),
        quiet=ctx.obj.get('QUIET', False),
    )
    configure_logging(level, logging_cfg.get('log_file'))


def _load_config_or_exit(config_file):
    try:
        config = load_config(Path(config_file) if config_file else None)
    except (ConfigValidationError, FileNotFoundError) as e:
        click.echo(f"✗ Error reading configuration: {e}", err=True)
        sys.exit(1)

    errors = validate_config(config)
    if errors:
        click.echo("✗ Configuration validation failed:", err=True)
        for error in errors:
            click.echo(f"  • {error}", err=True)
        sys.exit(1)
    return config


# ============================================================================
# Configuration Management Commands
# ============================================================================

@main.group()
def config():
    """Configuration management commands."""
    pass


@config.command('init')
@click.option('--output', '-o', type=click.Path(), default='variaweaver_config.yaml',
              help='Output configuration file path')
@click.option('--template', '-t', type=click.Choice(list(TEMPLATES)),
              default='default', help='Configuration template type')
def config_init(output, template):
    """Generate a template configuration file with all available parameters."""
    click.echo(f"Generating {template} configuration template: {output}")

    try:
        save_config_template(Path(output), template=template)
    except OSError as e:
        click.echo(f"✗ Error creating configuration: {e}", err=True)
        sys.exit(1)

    click.echo(f"✓ Configuration file created: {output}")
    click.echo("\nThe configuration file includes:")
    click.echo("  • Sample graph extraction settings")
    click.echo("  • Graph cleanup switches")
    click.echo("  • Logging settings")


@config.command('validate')
@click.argument('config_file', type=click.Path(exists=True))
def config_validate(config_file):
    """Validate a configuration file."""
    click.echo(f"Validating configuration file: {config_file}")

    try:
        config = load_config(Path(config_file))
    except ConfigValidationError as e:
        click.echo(f"✗ Error validating configuration: {e}", err=True)
        sys.exit(1)

    errors = validate_config(config)
    if errors:
        click.echo("\n✗ Configuration validation failed:")
        for error in errors:
            click.echo(f"  • {error}", err=True)
        sys.exit(1)

    click.echo("✓ Configuration is valid")
    click.echo("\nKey Settings:")
    click.echo(f"  Allele path prefix: {config['sample_graph']['alt_path_prefix']}")
    click.echo(f"  Sample: {config['sample_graph']['sample'] or '(single-sample VCF)'}")
    click.echo(f"  Logging level: {config['output']['logging']['level']}")


@config.command('show')
@click.argument('config_file', type=click.Path(exists=True))
@click.option('--format', '-f', type=click.Choice(['yaml', 'summary']), default='summary',
              help='Output format')
def config_show(config_file, format):
    """Display configuration settings."""
    try:
        config = load_config(Path(config_file))
    except ConfigValidationError as e:
        click.echo(f"✗ Error reading configuration: {e}", err=True)
        sys.exit(1)

    if format == 'yaml':
        click.echo(yaml.dump(config, default_flow_style=False, sort_keys=False))
        return

    errors = validate_config(config)
    if errors:
        click.echo("✗ Configuration validation failed:", err=True)
        for error in errors:
            click.echo(f"  • {error}", err=True)
        sys.exit(1)

    click.echo(f"Configuration from: {config_file}")
    click.echo("=" * 60)

    sample_graph = config['sample_graph']
    click.echo("\nSample Graph:")
    click.echo(f"  Allele path prefix: {sample_graph['alt_path_prefix']}")
    click.echo(f"  Sample: {sample_graph['sample'] or '(single-sample VCF)'}")
    click.echo(f"  Skip non-ACGT records: {sample_graph['skip_non_acgt']}")
    click.echo(f"  Drop allele paths: {sample_graph['drop_allele_paths']}")

    click.echo("\nGraph Cleanup:")
    click.echo(f"  Remove orphan edges: {config['graph_ops']['remove_orphans']}")
    click.echo(f"  Remove non-path elements: {config['graph_ops']['remove_non_path']}")

    click.echo("\nLogging:")
    click.echo(f"  Level: {config['output']['logging']['level']}")
    click.echo(f"  Log file: {config['output']['logging']['log_file'] or '(stderr only)'}")


# ============================================================================
# Graph Commands
# ============================================================================

@main.command()
@click.argument('graph_file', type=click.Path(exists=True))
@click.option('--output', '-o', type=click.Path(), default=None,
              help='Output GFA file (default: stdout)')
@click.option('--config', '-c', 'config_file', type=click.Path(exists=True),
              help='Configuration file (YAML)')
# ============================================================================
# Sample Graph Options
# ============================================================================
@click.option('--sample-vcf', type=click.Path(exists=True),
              help='For a graph with allele paths, compute the sample graph from this VCF')
@click.option('--sample', '-s', type=str, default=None,
              help='Sample to use from a multi-sample VCF')
@click.option('--keep-allele-paths', is_flag=True,
              help='Keep allele paths that survive sample graph extraction')
# ============================================================================
# Path and Graph Edits
# ============================================================================
@click.option('--keep-path', '-k', type=str, default=None,
              help='Keep only nodes and edges in this path')
@click.option('--retain-path', '-r', 'retain_path', multiple=True,
              help='Remove any path not specified for retention (repeatable)')
@click.option('--retain-complement', '-I', is_flag=True,
              help='Keep only paths NOT specified with --retain-path')
@click.option('--drop-paths', '-D', is_flag=True,
              help='Remove the paths of the graph')
@click.option('--remove-orphans', is_flag=True,
              help='Remove orphan edges (edge specified but node missing)')
@click.option('--remove-non-path', '-N', is_flag=True,
              help='Keep only nodes and edges which are part of paths')
@click.option('--kill-labels', '-K', is_flag=True,
              help='Delete the labels from the graph, resulting in empty nodes')
@click.option('--destroy-node', '-y', type=int, default=None,
              help='Remove node with given id (and the paths through it)')
@click.pass_context
def mod(ctx, graph_file, output, config_file,
        sample_vcf, sample, keep_allele_paths,
        keep_path, retain_path, retain_complement, drop_paths,
        remove_orphans, remove_non_path, kill_labels, destroy_node):
    """
    Filter, transform, and edit a GFA graph.

    Edits run in a fixed order: sample graph extraction, keep path, retain
    paths, drop paths, remove orphans, remove non-path, kill labels,
    destroy node. Nothing is written if any step fails.

    Examples:
        # Sample graph from a single-sample VCF
        variaweaver mod graph.gfa --sample-vcf calls.vcf.gz -o sample.gfa

        # Pick one sample out of a multi-sample VCF
        variaweaver mod graph.gfa --sample-vcf cohort.vcf.gz -s NA12878 -o na12878.gfa

        # Keep only the reference path
        variaweaver mod graph.gfa -k chr20 > chr20.gfa
    """
    config = _load_config_or_exit(config_file)
    _setup_logging(ctx, config)

    sample_cfg = config['sample_graph']
    if sample:
        sample_cfg['sample'] = sample
    if keep_allele_paths:
        sample_cfg['drop_allele_paths'] = False

    options = GraphModOptions(
        keep_path=keep_path,
        retain_paths=list(retain_path),
        retain_complement=retain_complement,
        drop_paths=drop_paths,
        remove_orphans=remove_orphans or config['graph_ops']['remove_orphans'],
        remove_non_path=remove_non_path or config['graph_ops']['remove_non_path'],
        kill_labels=kill_labels,
        destroy_node=destroy_node,
    )

    try:
        graph = load_graph_from_gfa(graph_file)

        if sample_vcf:
            with VcfVariantSource(sample_vcf) as source:
                result = extract_sample_graph(
                    graph,
                    source,
                    sample=sample_cfg['sample'],
                    alt_path_prefix=sample_cfg['alt_path_prefix'],
                    skip_non_acgt=sample_cfg['skip_non_acgt'],
                    drop_allele_paths=sample_cfg['drop_allele_paths'],
                )
            if not ctx.obj.get('QUIET', False):
                summary = result.to_dict()
                click.echo(
                    f"✓ Sample graph for {summary['sample']}: "
                    f"{summary['nodes_removed']} nodes and "
                    f"{summary['paths_removed'] + summary['allele_paths_swept']} paths removed "
                    f"({summary['records_used']} of {summary['records_seen']} records used)",
                    err=True,
                )

        if not options.is_empty():
            apply_modifications(graph, options)

    except (SampleGraphError, FileNotFoundError, ValueError, KeyError) as e:
        click.echo(f"✗ Error: {e}", err=True)
        sys.exit(1)

    if output:
        export_graph_to_gfa(graph, output)
    else:
        write_gfa(graph, sys.stdout)


@main.command()
@click.argument('graph_file', type=click.Path(exists=True))
@click.option('--config', '-c', 'config_file', type=click.Path(exists=True),
              help='Configuration file (YAML)')
@click.option('--format', '-f', type=click.Choice(['summary', 'json']), default='summary',
              help='Output format')
@click.pass_context
def stats(ctx, graph_file, config_file, format):
    """Report node, edge, path and allele-path counts of a GFA graph."""
    config = _load_config_or_exit(config_file)
    _setup_logging(ctx, config)

    try:
        graph = load_graph_from_gfa(graph_file)
    except ValueError as e:
        click.echo(f"✗ Error: {e}", err=True)
        sys.exit(1)

    index = AllelePathIndex.build(graph, prefix=config['sample_graph']['alt_path_prefix'])
    report = {
        'nodes': graph.node_count(),
        'edges': graph.edge_count(),
        'paths': graph.path_count(),
        'total_length': graph.total_length(),
        'allele_paths': len(index),
        'variants': len(index.alleles),
    }

    if format == 'json':
        click.echo(json.dumps(report, indent=2))
        return

    click.echo(f"Graph: {graph_file}")
    click.echo(f"  Nodes: {report['nodes']:,}")
    click.echo(f"  Edges: {report['edges']:,}")
    click.echo(f"  Paths: {report['paths']:,}")
    click.echo(f"  Total length: {report['total_length']:,} bp")
    click.echo(f"  Allele paths: {report['allele_paths']:,} over {report['variants']:,} variants")


if __name__ == '__main__':
    sys.exit(main())
