import django_filters

from .models import Project


class ProjectFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=Project.Status.choices)
    category = django_filters.ChoiceFilter(choices=Project.Category.choices)
    skills = django_filters.CharFilter(method="filter_skills")

    class Meta:
        model = Project
        fields = ["status", "category", "skills"]

    def filter_skills(self, queryset, name, value):
        # comma separated, matches any
        names = [s.strip() for s in value.split(",") if s.strip()]
        if not names:
            return queryset
        return queryset.filter(skills_required__name__in=names).distinct()
