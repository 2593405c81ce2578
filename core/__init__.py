"""Shared CLI plumbing: errors, argparse framework, YAML I/O."""
