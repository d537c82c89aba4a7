"""School administration package.

Organized by feature modules (students, attendance, exams, financials, ...)
with a thin Flask controller layer over service/repository layers backed by
the hosted Supabase database.
"""
