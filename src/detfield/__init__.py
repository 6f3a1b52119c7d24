"""
detfield: Deterministic 2-D Diffusion Engine

A stateful scalar-field simulator whose results are byte-identical for
identical (dim, seed, alpha, steps) inputs on any machine.

Core concepts:
- A seeded xorshift64 stream fills the initial field
- Each step applies a periodic 4-neighbor Laplacian: f += alpha * ∇²f
- The SHA-256 of (dim, step, alpha, field) fingerprints the full state
- Independent runs prove equivalence by comparing hashes
"""

__version__ = "0.1.0"
