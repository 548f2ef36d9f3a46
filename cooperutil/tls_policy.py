"""Settings that describe how a TLS connection is set up."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class TLSPolicy:
    """TLS configuration for a client or server connection.

    ``conf_cmds`` are (key, value) commands handed to the TLS library.
    ``alpn_protocols`` is the ALPN list: a server picks the first of its own
    entries that the client offers; a client sends the list as is.
    Turning off both ``use_system_cert_store`` and giving no ``ca_path``
    means no certificate validation at all. ``allow_broken_chain`` accepts
    certificates not signed by a trusted CA but still checks name and date;
    it has no effect when ``validate`` is false.
    """

    conf_cmds: list[tuple[str, str]] = field(default_factory=list)
    hostname: str = ""
    cert_path: str = ""
    key_path: str = ""
    ca_path: str = ""
    alpn_protocols: list[str] = field(default_factory=list)
    use_old_tls: bool = False
    validate: bool = True
    allow_broken_chain: bool = False
    use_system_cert_store: bool = True

    @staticmethod
    def default_server_policy(cert_path: str, key_path: str) -> TLSPolicy:
        """Server policy with the given certificate and key, no peer validation."""
        return TLSPolicy(
            validate=False,
            use_old_tls=False,
            use_system_cert_store=False,
            cert_path=cert_path,
            key_path=key_path,
        )

    @staticmethod
    def default_client_policy(hostname: str = "") -> TLSPolicy:
        """Client policy validating the server against the system store."""
        return TLSPolicy(
            validate=True,
            use_old_tls=False,
            use_system_cert_store=True,
            hostname=hostname,
        )