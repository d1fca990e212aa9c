"""Order ledger: one order per reconciled checkout session."""
