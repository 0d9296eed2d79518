from django.shortcuts import render, redirect, get_object_or_404

from .forms import ArticleForm
from .models import Article


def home(request):
    """Home page view listing articles."""
    articles = Article.objects.all()
    return render(request, 'main/home.html', {'articles': articles})


def article_edit(request, article_id=None):
    """Create or edit an article and its referenced assets."""
    article = get_object_or_404(Article, pk=article_id) if article_id else None

    if request.method == 'POST':
        form = ArticleForm(request.POST, instance=article)
        if form.is_valid():
            article = form.save()
            return redirect(article.get_absolute_url())
    else:
        form = ArticleForm(instance=article)

    return render(request, 'main/article_form.html', {'form': form, 'article': article})
