#!/usr/bin/env python3
"""
Verification script to check if all dependencies are installed correctly
"""

import sys

def check_import(module_name, package_name=None):
    """Check if a module can be imported"""
    if package_name is None:
        package_name = module_name
    
    try:
        __import__(module_name)
        print(f"✓ {package_name} - OK")
        return True
    except ImportError as e:
        print(f"✗ {package_name} - FAILED: {e}")
        return False

def main():
    """Check all required dependencies"""
    print("Checking gazemetrics Dependencies...")
    print("=" * 50)

    print(f"Python: {sys.version.split()[0]}")
    print()

    required = [
        ("numpy", "NumPy"),
        ("yaml", "PyYAML"),
        ("gazemetrics", "gazemetrics"),
    ]

    optional = [
        ("pytest", "pytest (test suite)"),
    ]

    results = []
    print("Required:")
    for module, name in required:
        results.append(check_import(module, name))

    print()
    print("Optional:")
    for module, name in optional:
        check_import(module, name)

    print("=" * 50)

    if all(results):
        print("\n✓ Required dependencies installed successfully!")
        print("\nRun the synthetic session example:")
        print("  python examples/synthetic_session.py")
        print("\nRun the tests:")
        print("  python -m pytest")
        return 0

    print("\n✗ Missing required dependencies.")
    print("Install with:")
    print("  pip install -e .[test]")
    return 1

if __name__ == "__main__":
    sys.exit(main())
