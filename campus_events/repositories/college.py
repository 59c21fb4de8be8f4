"""
College repository
"""

from campus_events.models import College
from .base import BaseRepo, contains


class CollegeRepo(BaseRepo):
    model = College
    entity_name = "college"
    conflict_message = "College already exists"

    @classmethod
    def order_by(cls):
        return [College.name, College.id]

    @classmethod
    def apply_filters(cls, query, filters):
        if filters.get("search"):
            query = query.filter(contains(College.name, filters['search']))
        return query
