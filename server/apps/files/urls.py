"""URL configuration for files app."""

from django.urls import path

from server.apps.files import views

app_name = 'files'

urlpatterns = [
    path('files', views.files_collection, name='collection'),
    path('files/<str:file_id>', views.file_detail, name='detail'),
    path('files/<str:file_id>/publish', views.file_publish, name='publish'),
    path('files/<str:file_id>/unpublish', views.file_unpublish, name='unpublish'),
    path('files/<str:file_id>/data', views.file_data, name='data'),
]
