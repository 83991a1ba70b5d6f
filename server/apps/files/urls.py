"""URL routes for files app."""

from django.urls import path

from server.apps.files import views

app_name = 'files'

urlpatterns = [
    path('csrf', views.csrf_token, name='csrf'),
    path('files', views.upload, name='upload'),
    path('files/<str:file_id>', views.delete_file, name='delete'),
    path('files/<str:file_id>/download', views.download_file, name='download'),
    path('files/<str:file_id>/restore', views.restore, name='restore'),
    path('folders', views.folder_create, name='folder_create'),
    path('folders/<str:folder_id>', views.folder_detail, name='folder_detail'),
]
