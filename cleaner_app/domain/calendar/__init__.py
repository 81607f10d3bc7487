"""
Calendar Domain

- dates.py: day-level normalization and comparisons
- indicators.py: dot configuration for a day's task count
- aggregator.py: week strip and month grid buckets
- task_colors.py: task card colors and header text
- persistence.py / service.py: selected date and month state
"""
