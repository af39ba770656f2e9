"""Claims System package.

Lecturers submit monthly hour claims, coordinators and managers approve them
in sequence and HR processes payment. The package is organised by feature
modules (lecturers, claims, automation, reporting, ...) with a thin Flask
controller layer over service/repository layers.
"""
