# todos/views.py

import logging

from django.apps import apps
from rest_framework import generics, permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from .digest import send_task_digest
from .models import Todo
from .outcomes import OutcomeStatus
from .prioritization import prioritize_open_todos
from .serializers import EmailTasksSerializer, TodoSerializer

logger = logging.getLogger(__name__)

PRIORITIZE_MESSAGES = {
    OutcomeStatus.NOTHING_TO_PRIORITIZE: "No tasks to prioritize",
    OutcomeStatus.NO_VALID_UPDATES: "AI processing completed, but no updates were made.",
    OutcomeStatus.UPDATED: "Tasks prioritized successfully",
}
PRIORITIZE_FAILED = "Failed to prioritize tasks or connect to AI service."

EMAIL_REQUIRED = "Target email is required."
EMAIL_SENT = "Your task list has been successfully sent!"
EMAIL_FAILED = "Email sending failed."


def _service(name):
    return getattr(apps.get_app_config('todos'), name)


class TodoListCreateView(generics.ListCreateAPIView):
    """
    GET: List all todos for the authenticated user.
    POST: Create a new todo.
    """
    serializer_class = TodoSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):
        # ensure user only sees own todos
        return Todo.objects.owned_by(self.request.user)

list_create_view = TodoListCreateView.as_view()


class TodoRetrieveUpdateDestroyView(generics.RetrieveUpdateDestroyAPIView):
    """
    GET, PUT, PATCH, DELETE for a single todo.
    Used for marking todos as complete (PATCH completed=True).
    """
    serializer_class = TodoSerializer
    permission_classes = [permissions.IsAuthenticated]

    # Other owners' todos are outside the queryset and therefore 404.
    def get_queryset(self):
        return Todo.objects.owned_by(self.request.user)

    def destroy(self, request, *args, **kwargs):
        super().destroy(request, *args, **kwargs)
        return Response({"message": "Todo deleted"})

retrieve_update_destroy_view = TodoRetrieveUpdateDestroyView.as_view()


class PrioritizeTodosView(APIView):
    """
    POST: Send the user's open todos to the AI classifier and store the
    priorities it returns.
    """
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):
        outcome = prioritize_open_todos(request.user, _service('classifier'))

        if outcome.is_failure:
            return Response(
                {"error": PRIORITIZE_FAILED},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        return Response({"message": PRIORITIZE_MESSAGES[outcome.status]})

prioritize_view = PrioritizeTodosView.as_view()


class EmailTasksView(APIView):
    """
    POST {"targetEmail": ...}: Mail the user's full todo list as a digest.
    """
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):
        serializer = EmailTasksSerializer(data=request.data)
        if not serializer.is_valid():
            # A non-object body reports under non_field_errors instead.
            field_errors = serializer.errors.get('targetEmail')
            error = str(field_errors[0]) if field_errors else EMAIL_REQUIRED
            return Response({"error": error}, status=status.HTTP_400_BAD_REQUEST)

        outcome = send_task_digest(
            request.user,
            serializer.validated_data['targetEmail'],
            _service('mail_dispatcher'),
        )

        if outcome.is_failure:
            return Response(
                {"error": EMAIL_FAILED},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        return Response({"message": EMAIL_SENT})

email_tasks_view = EmailTasksView.as_view()
