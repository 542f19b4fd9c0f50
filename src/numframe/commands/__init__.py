"""Shell commands exposing NumFrame functionalities.

This module contains the shell commands that can be used to interact with NumFrame.

Bench
=====

``numframe-bench`` times Series operations under each execution policy::

    numframe-bench --size 1000000 --policy unseq --policy par_unseq

Each scenario runs on Series of random values, the best and
average time of the runs are printed for every policy.
"""
