# Gas and sweep bookkeeping tables, written by the on-chain workers and read here
"""
gas_operations:
- id, operation_type, wallet_address, bnb_amount, gas_used, cost_usd,
  status (pending, completed, failed), error_message, created_at, completed_at

master_wallet_config (single row):
- id, wallet_address, min_bnb_reserve, gas_distribution_amount,
  sweep_threshold_high, sweep_threshold_medium, sweep_threshold_low,
  auto_sweep_enabled, max_daily_operations

sweep_schedules:
- id, user_id, wallet_address, usdt_balance, bnb_balance, priority (1-3),
  next_sweep_at, status

deposits:
- id, user_id, amount, status (swept once moved to the hot wallet), created_at

RPCs: get_gas_operation_stats(days_param), get_sweep_statistics()
"""

RECENT_OPERATIONS_LIMIT = 20
SWEEP_SCHEDULE_LIMIT = 50

PRIORITY_LABELS = {1: "High", 2: "Medium", 3: "Low"}
