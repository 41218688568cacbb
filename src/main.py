# ============================================================================
# PUNTO DE ENTRADA - Robot controlado por postura
# ============================================================================
from app.robot_app import RobotGestureApp


def main():
    """
    Punto de entrada de la aplicación.

    Manejo de errores:
        - KeyboardInterrupt (Ctrl+C): Cierre graceful por usuario
        - Exception general: Captura errores inesperados y muestra traceback

    Ejecución:
        python3 main.py
    """
    try:
        app = RobotGestureApp()
        app.run()
    except KeyboardInterrupt:
        print("\nInterrumpido por el usuario")
    except Exception as e:
        print(f"\nError: {e}")
        import traceback
        traceback.print_exc()


if __name__ == "__main__":
    main()
