"""
rkdisk Command-Line Interface
=============================

This package provides the rktool command, a Click-based CLI for
converting host files to and from the forms stored on Radio-86RK disks.
"""

__all__ = ["rktool"]
