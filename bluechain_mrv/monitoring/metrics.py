"""Prometheus metrics for the project lifecycle and wallet ledger"""

from prometheus_client import Counter

# Workflow metrics
project_submissions_total = Counter(
    'bluechain_project_submissions_total',
    'Total number of projects submitted by generators'
)

project_decisions_total = Counter(
    'bluechain_project_decisions_total',
    'Total number of validator decisions',
    ['status']
)

sensor_readings_total = Counter(
    'bluechain_sensor_readings_total',
    'Total number of sensor readings recorded'
)

# Access control metrics
denied_operations_total = Counter(
    'bluechain_denied_operations_total',
    'Operations refused by the role gate',
    ['operation', 'required_role']
)

# Ledger metrics
credit_purchases_total = Counter(
    'bluechain_credit_purchases_total',
    'Total number of BCC purchases'
)

credits_purchased_total = Counter(
    'bluechain_credits_purchased_total',
    'Total BCC credits purchased'
)

wallets_created_total = Counter(
    'bluechain_wallets_created_total',
    'Total number of wallets created'
)

# Realtime metrics
events_published_total = Counter(
    'bluechain_events_published_total',
    'Lifecycle events published to the broker',
    ['event_type']
)

subscriber_failures_total = Counter(
    'bluechain_subscriber_failures_total',
    'Subscribers dropped after a delivery failure'
)
