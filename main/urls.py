from django.urls import path
from . import views

app_name = 'main'

urlpatterns = [
    path('', views.home, name='home'),
    path('articles/new/', views.article_edit, name='article-create'),
    path('articles/<int:article_id>/', views.article_edit, name='article-edit'),
]
