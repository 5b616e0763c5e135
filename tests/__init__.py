"""Test suite for rpcbench.

Unit tests live under unit/, grouped by domain (pipeline, scoring, chain,
rpc, config, report). Collaborators are replaced by the in-memory fakes in
helpers/; nothing here touches a real RPC node.
"""
