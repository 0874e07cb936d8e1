from django.urls import path
from .views import (
    email_tasks_view,
    list_create_view,
    prioritize_view,
    retrieve_update_destroy_view,
)

urlpatterns = [
    # GET and POST (List and Create)
    path('', list_create_view, name="todo-list-create"),

    path('prioritize', prioritize_view, name="todo-prioritize"),
    path('email-tasks', email_tasks_view, name="todo-email-tasks"),

    # GET, PUT, PATCH, DELETE (Detail and Manipulation)
    path('<int:pk>', retrieve_update_destroy_view, name="todo-detail"),
]
