"""
I/O utilities for VariaWeaver.

CONSOLIDATED MODULES:
- gfa_io.py: GFA v1 graph import/export and validation
- vcf_source.py: Variant records, variant ids, pysam-backed VCF reader
"""

from .gfa_io import (
    GFASegment,
    GFALink,
    GFAPath,
    read_gfa,
    write_gfa,
    load_graph_from_gfa,
    export_graph_to_gfa,
    validate_gfa_file,
)

from .vcf_source import (
    VariantRecord,
    VariantSource,
    RecordListSource,
    VcfVariantSource,
    make_variant_id,
    format_genotype,
)

__all__ = [
    # GFA records
    "GFASegment",
    "GFALink",
    "GFAPath",

    # GFA I/O
    "read_gfa",
    "write_gfa",
    "load_graph_from_gfa",
    "export_graph_to_gfa",
    "validate_gfa_file",

    # Variant sources
    "VariantRecord",
    "VariantSource",
    "RecordListSource",
    "VcfVariantSource",
    "make_variant_id",
    "format_genotype",
]
