"""Background workers for the plot ledger service"""
from .balance_reconciler import BalanceReconcilerWorker

__all__ = ["BalanceReconcilerWorker"]
