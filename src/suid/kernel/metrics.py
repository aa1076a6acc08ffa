"""
Prometheus metrics collection for SUID.

Counters only; exposing them is left to the host application's exporter.
"""

from prometheus_client import Counter

# ============================================================================
# Generation Metrics
# ============================================================================

identifiers_generated_total = Counter(
    "suid_identifiers_generated_total",
    "Total number of identifiers generated in this process",
)

# ============================================================================
# Sequence Counter Metrics
# ============================================================================

sequence_seeds_total = Counter(
    "suid_sequence_seeds_total",
    "Total number of times the sequence counter was seeded",
    ["source"],  # source: random, explicit
)

sequence_wraparounds_total = Counter(
    "suid_sequence_wraparounds_total",
    "Total number of times the 24-bit sequence counter wrapped to zero",
)

# ============================================================================
# Machine Identity Metrics
# ============================================================================

machine_identity_resolutions_total = Counter(
    "suid_machine_identity_resolutions_total",
    "Total number of machine identity resolutions",
    ["source"],  # source: hardware, configured, random
)
