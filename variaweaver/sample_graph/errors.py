"""
VariaWeaver v0.1.0

Exceptions raised while extracting a sample graph.

All of them are raised while genotypes are being resolved, before the graph
is modified.
"""

from typing import Optional


class SampleGraphError(Exception):
    """Base class for sample-graph extraction failures."""
    pass


class ConfigurationError(SampleGraphError):
    """Raised when the variant source cannot be narrowed to one sample."""
    pass


class ConsistencyError(SampleGraphError):
    """Raised when a variant has no reference allele path in the graph."""

    def __init__(self, variant_id: str, message: Optional[str] = None):
        self.variant_id = variant_id
        super().__init__(message or f"Reference allele path for variant {variant_id} not in graph")


class MalformedGenotypeError(SampleGraphError):
    """Raised when a genotype token is neither '.' nor a non-negative integer."""

    def __init__(self, genotype: str, token: str, variant_id: Optional[str] = None):
        self.genotype = genotype
        self.token = token
        self.variant_id = variant_id
        where = f" for variant {variant_id}" if variant_id else ""
        super().__init__(f"Malformed genotype '{genotype}'{where}: bad allele token '{token}'")
