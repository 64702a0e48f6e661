"""
grafana-tfgen: generate Terraform configuration from live Grafana resources.
"""

__version__ = "0.1.0"
