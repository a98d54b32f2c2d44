"""Site Timesheet package.

Work-shift logging for construction sites: foremen check workers in and out,
administrators manage sites/workers and export timesheet reports. Organized by
feature modules (shifts, records, reports, ...) with a thin Flask controller
layer over service/repository layers.
"""
