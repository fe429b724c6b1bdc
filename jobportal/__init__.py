"""Job portal: session, job catalog and application state plus the items API."""
