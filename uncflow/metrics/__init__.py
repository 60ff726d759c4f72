"""Metric name enumerations and derivation of CHA metrics from raw readings."""