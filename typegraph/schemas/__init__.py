"""Compiled schemas bundled with typegraph."""
