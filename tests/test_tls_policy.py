from cooperutil.tls_policy import TLSPolicy


def test_defaults():
    policy = TLSPolicy()
    assert policy.conf_cmds == []
    assert policy.hostname == ""
    assert policy.cert_path == ""
    assert policy.key_path == ""
    assert policy.ca_path == ""
    assert policy.alpn_protocols == []
    assert policy.use_old_tls is False
    assert policy.validate is True
    assert policy.allow_broken_chain is False
    assert policy.use_system_cert_store is True


def test_default_server_policy():
    policy = TLSPolicy.default_server_policy("server.crt", "server.key")
    assert policy.cert_path == "server.crt"
    assert policy.key_path == "server.key"
    assert policy.validate is False
    assert policy.use_old_tls is False
    assert policy.use_system_cert_store is False
    assert policy.hostname == ""


def test_default_client_policy():
    policy = TLSPolicy.default_client_policy("www.example.com")
    assert policy.hostname == "www.example.com"
    assert policy.validate is True
    assert policy.use_old_tls is False
    assert policy.use_system_cert_store is True
    assert policy.cert_path == ""


def test_default_client_policy_without_hostname():
    assert TLSPolicy.default_client_policy().hostname == ""


def test_lists_are_not_shared():
    first = TLSPolicy()
    second = TLSPolicy()
    first.alpn_protocols.append("h2")
    first.conf_cmds.append(("Options", "-SessionTicket"))
    assert second.alpn_protocols == []
    assert second.conf_cmds == []


def test_fields_can_be_set():
    policy = TLSPolicy(
        alpn_protocols=["h2", "http/1.1"],
        ca_path="/etc/ssl/ca.pem",
        allow_broken_chain=True,
    )
    assert policy.alpn_protocols == ["h2", "http/1.1"]
    assert policy.ca_path == "/etc/ssl/ca.pem"
    assert policy.allow_broken_chain is True
    assert policy == TLSPolicy(
        alpn_protocols=["h2", "http/1.1"],
        ca_path="/etc/ssl/ca.pem",
        allow_broken_chain=True,
    )