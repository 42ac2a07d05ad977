"""ERP dashboard backend: per-user CRM/invoicing repositories and the trash ledger."""
