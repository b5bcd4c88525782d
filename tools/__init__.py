"""
Helper scripts for the true-size grid tools.

The tools package contains stand-alone utilities that sit next to the
main demo, such as laying out an arbitrary set of image files on one
true-size canvas from a checkout without installing the package.
"""
