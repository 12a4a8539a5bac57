import logging
import ssl

logger = logging.getLogger(__name__)


def build_ssl_context(insecure: bool = False, ca_file: str | None = None) -> ssl.SSLContext:
    """
    Build the TLS context shared by every MCP transport.

    Certificates are verified against the system store, plus the CA bundle in
    ``ca_file`` when given. ``insecure`` disables verification entirely and is
    meant for closed networks with self-signed endpoints only.
    """
    context = ssl.create_default_context()
    if ca_file:
        context.load_verify_locations(cafile=ca_file)
        logger.info(f"Trusting additional CA certificates from {ca_file}")
    if insecure:
        logger.warning("TLS certificate verification is DISABLED for MCP endpoints")
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    return context
