"""
Service layer.

``EntityStore`` handles every write and point lookup, and
``AnalyticsService`` computes the read-only reports.  Both receive the
``Database`` handle explicitly so endpoints and tests decide which
store they run against.
"""
