"""Django urlconf for the Todo Gateway"""

from django.urls import path

from todo_gateway import views

urlpatterns = [path("graphql", views.graphql, name="graphql")]
