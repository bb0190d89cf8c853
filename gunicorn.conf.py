# Offender Registry - a records dashboard for persons, offenders and crimes
# Copyright (C) 2025 Offender Registry Authors
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.
# =============================================================================
"""Configures gunicorn"""
import multiprocessing

wsgi_app = "offender_registry.server:create_app()"

# Every worker holds its own database connection pool, so keep the worker count
# in line with the connection limit of the database.
workers = (2 * multiprocessing.cpu_count()) + 1
# Use a threaded worker
worker_class = "gthread"
threads = 4
timeout = 60
loglevel = "info"
accesslog = "-"
errorlog = "-"
keepalive = 5
