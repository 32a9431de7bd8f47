def pytest_configure(config):
    """Register custom markers to avoid warnings."""
    config.addinivalue_line("markers", "billing: bill reconciliation tests")
    config.addinivalue_line("markers", "projection: cash-flow / ROI projection tests")
    config.addinivalue_line("markers", "formatting: pt-BR number formatting tests")
    config.addinivalue_line("markers", "parsing: invoice parsing and validation tests")
    config.addinivalue_line("markers", "reports: tabular reports and proposal summary tests")
    config.addinivalue_line("markers", "cli: command-line tests")
