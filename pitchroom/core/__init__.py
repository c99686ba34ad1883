"""
Core pipeline logic: gate scan, sequencing, revision, scoring and calibration.
"""
