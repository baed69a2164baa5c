"""
Static mock catalog used when the generation service cannot deliver.

The catalog is a build-time asset: two read-only mappings from topic key to
pre-authored quiz questions and learning path steps, each with a `default`
entry. Nothing in the process mutates it.
"""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping

DEFAULT_KEY = "default"


@dataclass(frozen=True)
class CatalogQuestion:
    prompt: str
    options: tuple[str, ...]
    correct_index: int


@dataclass(frozen=True)
class CatalogStep:
    title: str
    description: str
    resources: tuple[str, ...]
    estimated_minutes: int


def _q(prompt: str, options: Iterable[str], correct_index: int) -> CatalogQuestion:
    return CatalogQuestion(prompt=prompt, options=tuple(options), correct_index=correct_index)


def _s(title: str, description: str, resources: Iterable[str], minutes: int) -> CatalogStep:
    return CatalogStep(title=title, description=description, resources=tuple(resources), estimated_minutes=minutes)


# ----------------------------
# Quiz questions
# ----------------------------

QUIZ_CATALOG: Mapping[str, tuple[CatalogQuestion, ...]] = MappingProxyType({
    "machine-learning": (
        _q(
            "What is the term used to describe a dataset that contains attribute values as well as class labels for each instance?",
            ["Training set", "Testing set", "Validation set", "Instance set"],
            0,
        ),
        _q(
            "What is a Support Vector Machine (SVM)?",
            [
                "A type of deep learning model that uses neural networks",
                "A supervised machine learning algorithm that finds a hyperplane with the maximum margin",
                "An unsupervised machine learning algorithm that groups similar data points",
                "A type of reinforcement learning model that makes decisions based on rewards and penalties",
            ],
            1,
        ),
        _q(
            "What is the systematic approach for learning a classification model given a training set known as?",
            ["Classification algorithm", "Learning algorithm", "Feature representation", "Induction process"],
            1,
        ),
        _q(
            "What is a training set in the context of machine learning?",
            [
                "A set of pre-trained models used for predicting outcomes",
                "A dataset containing attribute values and class labels for each instance",
                "A type of machine learning algorithm used for classification tasks",
                "A method for evaluating the performance of a machine learning model",
            ],
            1,
        ),
        _q(
            "What is the process of using a learning algorithm to build a classification model from the training data also known as?",
            ["Feature extraction", "Induction", "Hypothesis testing", "Model optimization"],
            1,
        ),
    ),
    "sorting": (
        _q("What is the time complexity of QuickSort in the average case?", ["O(n)", "O(n log n)", "O(n²)", "O(log n)"], 1),
        _q("Which sorting algorithm is known for its stability?", ["QuickSort", "Bubble Sort", "Merge Sort", "Heap Sort"], 2),
        _q("What is the space complexity of Merge Sort?", ["O(1)", "O(log n)", "O(n)", "O(n²)"], 2),
    ),
    "knn": (
        _q("What does KNN stand for?", ["K-Nearest Networks", "K-Nearest Neighbors", "K-Nearest Nodes", "K-Neural Networks"], 1),
        _q(
            "What is the primary parameter in KNN that affects the algorithm's performance?",
            ["The value of K", "The distance metric", "The dataset size", "The number of features"],
            0,
        ),
        _q(
            "Which distance metric is commonly used in KNN?",
            ["Manhattan distance", "Euclidean distance", "Hamming distance", "All of the above"],
            3,
        ),
    ),
    "naive-bayes": (
        _q(
            "What assumption does Naive Bayes make about features?",
            [
                "Features are dependent on each other",
                "Features are independent of each other",
                "Features must be normally distributed",
                "Features must be categorical",
            ],
            1,
        ),
        _q(
            "Naive Bayes is based on which theorem?",
            ["Pythagorean Theorem", "Central Limit Theorem", "Bayes' Theorem", "Binomial Theorem"],
            2,
        ),
        _q(
            "Which of the following is NOT a type of Naive Bayes classifier?",
            ["Gaussian Naive Bayes", "Multinomial Naive Bayes", "Bernoulli Naive Bayes", "Logarithmic Naive Bayes"],
            3,
        ),
        _q(
            "Naive Bayes is commonly used for which application?",
            ["Image recognition", "Text classification", "Reinforcement learning", "Neural networks"],
            1,
        ),
        _q(
            "What happens when a probability of zero is encountered in Naive Bayes?",
            ["The algorithm crashes", "The entire prediction becomes zero", "Laplace smoothing is applied", "The feature is ignored"],
            2,
        ),
    ),
    DEFAULT_KEY: (
        _q(
            "What is an algorithm?",
            [
                "A programming language",
                "A step-by-step procedure for solving a problem",
                "A type of computer hardware",
                "A database management system",
            ],
            1,
        ),
        _q(
            "What does CPU stand for?",
            ["Central Processing Unit", "Computer Personal Unit", "Central Program Utility", "Central Processor Underneath"],
            0,
        ),
        _q(
            "Which data structure follows the Last In First Out (LIFO) principle?",
            ["Queue", "Stack", "Linked List", "Tree"],
            1,
        ),
    ),
})


# ----------------------------
# Learning paths
# ----------------------------

LEARNING_PATH_CATALOG: Mapping[str, tuple[CatalogStep, ...]] = MappingProxyType({
    "machine-learning": (
        _s(
            "Introduction to Machine Learning",
            "Learn the fundamental concepts of machine learning, including supervised and unsupervised learning.",
            ["https://www.coursera.org/learn/machine-learning", "https://www.youtube.com/watch?v=mbyG85GZ0PI"],
            60,
        ),
        _s(
            "Data Preprocessing",
            "Understand how to clean, normalize, and prepare data for machine learning models.",
            [
                "https://scikit-learn.org/stable/modules/preprocessing.html",
                "https://towardsdatascience.com/data-preprocessing-concepts-fa946d11c825",
            ],
            90,
        ),
        _s(
            "Supervised Learning Algorithms",
            "Explore common supervised learning algorithms like linear regression, logistic regression, and decision trees.",
            [
                "https://www.analyticsvidhya.com/blog/2017/09/common-machine-learning-algorithms/",
                "https://machinelearningmastery.com/a-tour-of-machine-learning-algorithms/",
            ],
            120,
        ),
        _s(
            "Model Evaluation",
            "Learn techniques to evaluate and improve machine learning models.",
            [
                "https://scikit-learn.org/stable/modules/model_evaluation.html",
                "https://towardsdatascience.com/metrics-to-evaluate-your-machine-learning-algorithm-f10ba6e38234",
            ],
            90,
        ),
        _s(
            "Practical Project",
            "Apply your knowledge by building a simple classification model on a real-world dataset.",
            ["https://www.kaggle.com/datasets", "https://github.com/awesomedata/awesome-public-datasets"],
            180,
        ),
    ),
    "deep-learning": (
        _s(
            "Neural Networks Fundamentals",
            "Understand the basic structure and mathematics behind neural networks.",
            ["https://www.deeplearningbook.org/", "https://www.youtube.com/watch?v=aircAruvnKk"],
            120,
        ),
        _s(
            "Introduction to TensorFlow/PyTorch",
            "Get familiar with popular deep learning frameworks.",
            ["https://www.tensorflow.org/tutorials", "https://pytorch.org/tutorials/"],
            150,
        ),
        _s(
            "Convolutional Neural Networks",
            "Learn about CNNs and their applications in image processing.",
            ["https://cs231n.github.io/", "https://www.youtube.com/watch?v=FmpDIaiMIeA"],
            180,
        ),
        _s(
            "Recurrent Neural Networks",
            "Explore RNNs, LSTMs, and their applications in sequence modeling.",
            ["https://colah.github.io/posts/2015-08-Understanding-LSTMs/", "https://www.youtube.com/watch?v=LHXXI4-IEns"],
            150,
        ),
        _s(
            "Deep Learning Project",
            "Build a deep learning model to solve a real-world problem.",
            ["https://paperswithcode.com/", "https://www.kaggle.com/competitions"],
            240,
        ),
    ),
    DEFAULT_KEY: (
        _s(
            "Introduction to the Topic",
            "Learn the fundamental concepts and terminology.",
            ["https://www.wikipedia.org", "https://www.youtube.com/results?search_query=introduction+to+"],
            60,
        ),
        _s(
            "Core Principles",
            "Understand the key principles and methodologies.",
            ["https://www.coursera.org", "https://www.edx.org"],
            90,
        ),
        _s(
            "Practical Application",
            "Apply your knowledge to solve real-world problems.",
            ["https://github.com/topics/", "https://www.kaggle.com/datasets"],
            120,
        ),
    ),
})


# ----------------------------
# Key matching
# ----------------------------

def match_key(key: str, keys: Iterable[str], policy: str = "first") -> str:
    """
    Resolve a normalized topic key against catalog keys.

    Order: exact match, then substring containment in either direction,
    then `default`. With policy "first" the first containing key in catalog
    order wins; with "longest" the longest containing key wins (catalog
    order breaks ties). An empty key never substring-matches.
    """
    keys = [k for k in keys if k != DEFAULT_KEY]
    if key in keys:
        return key
    if not key:
        return DEFAULT_KEY

    candidates = [k for k in keys if k in key or key in k]
    if not candidates:
        return DEFAULT_KEY
    if policy == "longest":
        # max() keeps the first of equal-length keys
        return max(candidates, key=len)
    return candidates[0]
