# apps/board/urls.py

from django.urls import path
from . import views

app_name = 'board'

urlpatterns = [
    # Boards
    path('create/', views.create_board, name='create'),
    path('<int:board_id>/', views.board_detail, name='detail'),
    path('<int:board_id>/update/', views.update_board, name='update'),
    path('<int:board_id>/delete/', views.delete_board, name='delete'),
    path('<int:board_id>/copy/', views.copy_board, name='copy'),

    # Lists
    path('<int:board_id>/lists/create/', views.create_list, name='create_list'),
    path('<int:board_id>/lists/update/', views.update_list, name='update_list'),
    path('<int:board_id>/lists/delete/', views.delete_list, name='delete_list'),
    path('<int:board_id>/lists/copy/', views.copy_list, name='copy_list'),
    path('<int:board_id>/lists/reorder/', views.reorder_lists, name='reorder_lists'),

    # Cards
    path('<int:board_id>/cards/create/', views.create_card, name='create_card'),
    path('<int:board_id>/cards/update/', views.update_card, name='update_card'),
    path('<int:board_id>/cards/delete/', views.delete_card, name='delete_card'),
    path('<int:board_id>/cards/copy/', views.copy_card, name='copy_card'),
    path('<int:board_id>/cards/reorder/', views.reorder_cards, name='reorder_cards'),

    # Card modal
    path('cards/<int:card_id>/', views.card_detail, name='card_detail'),
]
