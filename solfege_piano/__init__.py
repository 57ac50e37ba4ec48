"""Solfège Piano - 虚拟钢琴与视唱练耳听写练习"""

__version__ = "0.1.0"
