"""Commission calculator and invoice ledger."""
