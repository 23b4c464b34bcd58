"""Domain layer for fintrack application.

Services are imported from their modules directly (for example
``fintrack.domain.activity``); the database layer imports entities from this
package, so nothing is re-exported here.
"""
