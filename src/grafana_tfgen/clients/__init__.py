from grafana_tfgen.clients.base import APIError, BaseHTTPClient
from grafana_tfgen.clients.cloud import CloudClient
from grafana_tfgen.clients.grafana import GrafanaClient

__all__ = ["APIError", "BaseHTTPClient", "CloudClient", "GrafanaClient"]
