"""Farm workforce package.

Feature modules (workers, attendance, advances, payroll, payments, stats)
each carry their own model, repository, service and thin Flask controller.
Monthly salaries are never stored: they are recomputed from attendance and
the append-only payment and advance ledgers.
"""
