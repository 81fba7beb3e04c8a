"""
Service layer abstraction.

Each service encapsulates the business logic for one kind of record:
the catalog owns items, the directory owns principals and the ledger
owns loan transactions.  Services keep their records in memory and
share the store lock handed to them by ``core.store.LendingStore``.
"""
