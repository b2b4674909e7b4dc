# Expose the resolution pipeline modules
from recon import chain_resolver, dns_client, pipeline
__all__ = [
    "dns_client",
    "chain_resolver",
    "pipeline",
]
